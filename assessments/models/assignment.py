from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from .assessment import Test


class Assignment(models.Model):
    """
    A directive that a test is owed by one student or by one class.

    Class rows are not expanded; membership is looked up when a student
    starts the test.
    """

    ASSIGNED_TO_TYPE_CHOICES = [
        ('student', 'Student'),
        ('class', 'Class'),
    ]

    test = models.ForeignKey(Test, on_delete=models.CASCADE, related_name='assignments', verbose_name=_('test'))
    assigned_to_type = models.CharField(_('assigned to type'), max_length=10, choices=ASSIGNED_TO_TYPE_CHOICES)
    assigned_to_id = models.PositiveIntegerField(_('assigned to id'))
    due_date = models.DateTimeField(_('due date'), null=True, blank=True)
    is_mandatory = models.BooleanField(_('mandatory'), default=True)
    notes = models.TextField(_('notes'), blank=True)

    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='test_assignments_made',
        verbose_name=_('assigned by')
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('Assignment')
        verbose_name_plural = _('Assignments')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['test', 'assigned_to_type', 'assigned_to_id'],
                name='unique_assignment_target',
            ),
        ]
        indexes = [
            models.Index(fields=['assigned_to_type', 'assigned_to_id'], name='assignment_target_idx'),
        ]

    def __str__(self):
        return f"{self.test.name} -> {self.assigned_to_type}:{self.assigned_to_id}"
