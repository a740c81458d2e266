"""
Roster lookups.

Students, classes and centers are managed by other parts of the system; the
assessment services only read membership through these helpers.
"""
from assessments.models import Class, Student

from .exceptions import NotFoundError


class RosterService:

    @classmethod
    def get_student(cls, student_id) -> Student:
        try:
            return Student.objects.get(pk=student_id)
        except (Student.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Student {student_id} not found")

    @classmethod
    def get_class(cls, class_id) -> Class:
        try:
            return Class.objects.get(pk=class_id)
        except (Class.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Class {class_id} not found")

    @classmethod
    def class_ids_for_student(cls, student):
        """Current class memberships, read at call time"""
        return list(student.classes.filter(is_active=True).values_list('id', flat=True))

    @classmethod
    def enrolled_students(cls, center):
        return Student.objects.filter(center=center, is_active=True)
