from rest_framework import permissions


def is_author(user):
    """Teachers, superusers and admins may author, assign and grade tests"""
    if not user or not user.is_authenticated:
        return False
    if getattr(user, 'is_superuser', False):
        return True
    return getattr(user, 'user_type', None) in ['teacher', 'superuser', 'admin']


def student_profile(user):
    """The Student record linked to ``user``, or None"""
    if not user or not user.is_authenticated:
        return None
    return getattr(user, 'student_profile', None)


def owns_student(user, student):
    """True when ``user`` is the account of ``student``"""
    profile = student_profile(user)
    return profile is not None and student is not None and profile.pk == student.pk


def can_view_student(user, student):
    return is_author(user) or owns_student(user, student)


class IsAuthorOrGrader(permissions.BasePermission):
    """
    Permission check for test authors and graders.
    Allows authenticated users with user_type 'teacher', 'superuser' or 'admin'.
    """

    def has_permission(self, request, view):
        return is_author(request.user)


class IsAuthorOrGraderOrReadOnly(permissions.BasePermission):
    """
    Permission check that allows:
    - Authors: Full access (GET, POST, PUT, PATCH, DELETE)
    - Other authenticated users: Read-only access (GET)
    - Unauthenticated users: No access
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        return is_author(request.user)
