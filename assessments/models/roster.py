from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Center(models.Model):
    """An education center; owns tests, classes and students"""

    name = models.CharField(_('center name'), max_length=150)
    code = models.CharField(_('center code'), max_length=20, unique=True)
    is_active = models.BooleanField(_('active'), default=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    class Meta:
        verbose_name = _('Center')
        verbose_name_plural = _('Centers')
        ordering = ['name']

    def __str__(self):
        return self.name


class Class(models.Model):
    """A teaching group inside a center"""

    name = models.CharField(_('class name'), max_length=100)
    center = models.ForeignKey(
        Center,
        on_delete=models.CASCADE,
        related_name='classes',
        verbose_name=_('center')
    )
    teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classes_taught',
        verbose_name=_('teacher')
    )
    is_active = models.BooleanField(_('active'), default=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    class Meta:
        verbose_name = _('Class')
        verbose_name_plural = _('Classes')
        ordering = ['center', 'name']
        unique_together = [['center', 'name']]

    def __str__(self):
        return f"{self.name} ({self.center.name})"


class Student(models.Model):
    """Enrolled student. Roster data is managed elsewhere; this is the read side."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='student_profile',
        verbose_name=_('user')
    )
    first_name = models.CharField(_('first name'), max_length=100)
    last_name = models.CharField(_('last name'), max_length=100)
    enrollment_number = models.CharField(_('enrollment number'), max_length=30, unique=True)
    center = models.ForeignKey(
        Center,
        on_delete=models.CASCADE,
        related_name='students',
        verbose_name=_('center')
    )
    classes = models.ManyToManyField(
        Class,
        blank=True,
        related_name='students',
        verbose_name=_('classes')
    )
    is_active = models.BooleanField(_('active'), default=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    class Meta:
        verbose_name = _('Student')
        verbose_name_plural = _('Students')
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return f"{self.get_full_name()} ({self.enrollment_number})"

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
