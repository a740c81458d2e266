from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from .assessment import Test, Question
from .roster import Student


OPEN_STATUSES = ['not_started', 'in_progress']
TERMINAL_STATUSES = ['submitted', 'graded']


class Submission(models.Model):
    """One student's attempt at a test"""

    STATUS_CHOICES = [
        ('not_started', 'Not Started'),
        ('in_progress', 'In Progress'),
        ('submitted', 'Submitted'),
        ('graded', 'Graded'),
    ]

    test = models.ForeignKey(Test, on_delete=models.CASCADE, related_name='submissions', verbose_name=_('test'))
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='submissions', verbose_name=_('student'))
    status = models.CharField(_('status'), max_length=20, choices=STATUS_CHOICES, default='not_started')
    attempt_number = models.PositiveSmallIntegerField(_('attempt number'), default=1)

    started_at = models.DateTimeField(_('started at'), blank=True, null=True)
    submitted_at = models.DateTimeField(_('submitted at'), blank=True, null=True)
    graded_at = models.DateTimeField(_('graded at'), blank=True, null=True)
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='graded_submissions',
        verbose_name=_('graded by')
    )
    graded_by_type = models.CharField(_('graded by type'), max_length=20, blank=True)

    total_marks = models.PositiveIntegerField(_('total marks'), default=0)
    passing_marks = models.PositiveIntegerField(_('passing marks'), default=0)
    auto_score = models.DecimalField(_('auto score'), max_digits=7, decimal_places=2, blank=True, null=True)
    score = models.DecimalField(_('score'), max_digits=7, decimal_places=2, blank=True, null=True)
    percentage = models.DecimalField(_('percentage'), max_digits=5, decimal_places=2, blank=True, null=True)
    passed = models.BooleanField(_('passed'), blank=True, null=True)

    question_order = models.JSONField(_('question order'), blank=True, null=True)
    question_marks = models.JSONField(_('question marks'), default=dict, blank=True)
    draft_answers = models.JSONField(_('draft answers'), default=dict, blank=True)
    time_taken_seconds = models.PositiveIntegerField(_('time taken (seconds)'), blank=True, null=True)
    was_forced = models.BooleanField(_('forced submission'), default=False)
    feedback = models.TextField(_('feedback'), blank=True)
    ip_address = models.GenericIPAddressField(_('ip address'), blank=True, null=True)

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('Submission')
        verbose_name_plural = _('Submissions')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['student', 'test'],
                condition=models.Q(status__in=OPEN_STATUSES),
                name='one_open_submission_per_student_test',
            ),
            models.UniqueConstraint(
                fields=['student', 'test', 'attempt_number'],
                name='unique_submission_attempt',
            ),
        ]
        indexes = [
            models.Index(fields=['test', 'status'], name='submission_test_status_idx'),
            models.Index(fields=['student', 'status'], name='submission_student_status_idx'),
        ]

    def __str__(self):
        return f"{self.student} - {self.test.name} (attempt {self.attempt_number})"

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    @property
    def has_pending_answers(self):
        return self.answers.filter(marks_awarded__isnull=True).exists()

    def awarded_total(self):
        total = Decimal('0')
        for answer in self.answers.all():
            if answer.marks_awarded is not None:
                total += answer.marks_awarded
        return total

    def marks_for(self, question):
        """Marks the question was worth when this attempt started"""
        return (self.question_marks or {}).get(str(question.pk), question.marks)

    def clamp_score(self, value):
        value = Decimal(value)
        if value < 0:
            return Decimal('0')
        ceiling = Decimal(self.total_marks)
        return ceiling if value > ceiling else value

    def percentage_for(self, value):
        if not self.total_marks:
            return Decimal('0')
        return (Decimal(value) / Decimal(self.total_marks) * 100).quantize(Decimal('0.01'))


class Answer(models.Model):
    """A materialized answer, created when its submission is submitted"""

    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name='answers', verbose_name=_('submission'))
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name='answers', verbose_name=_('question'))
    student_answer = models.JSONField(_('student answer'), blank=True, null=True)
    is_correct = models.BooleanField(_('is correct'), blank=True, null=True)
    marks_awarded = models.DecimalField(_('marks awarded'), max_digits=6, decimal_places=2, blank=True, null=True)
    feedback = models.TextField(_('feedback'), blank=True)
    is_manually_graded = models.BooleanField(_('manually graded'), default=False)
    graded_at = models.DateTimeField(_('graded at'), blank=True, null=True)

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('Answer')
        verbose_name_plural = _('Answers')
        ordering = ['submission', 'question__question_order', 'question_id']
        unique_together = [['submission', 'question']]

    def __str__(self):
        return f"{self.submission} - Q{self.question.question_order}"

    @property
    def is_resolved(self):
        return self.marks_awarded is not None
