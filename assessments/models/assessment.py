from django.conf import settings
from django.db import models
from django.db.models import Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .roster import Center


TEST_TYPE_CHOICES = [
    ('multiple_choice', 'Multiple Choice'),
    ('essay', 'Essay'),
    ('short_answer', 'Short Answer'),
    ('true_false', 'True/False'),
    ('form_filling', 'Form Filling'),
    ('reading_passage', 'Reading Passage'),
    ('writing', 'Writing'),
    ('matching', 'Matching'),
]

QUESTION_TYPE_CHOICES = [
    ('multiple_choice', 'Multiple Choice'),
    ('true_false', 'True/False'),
    ('short_answer', 'Short Answer'),
    ('form_filling', 'Form Filling'),
    ('matching', 'Matching'),
    ('essay', 'Essay'),
    ('writing', 'Writing'),
]


class Test(models.Model):
    """An authored assessment: metadata plus ordered questions and optional passages"""

    ASSIGNMENT_TYPE_CHOICES = [
        ('all_students', 'All Students'),
        ('specific_classes', 'Specific Classes'),
        ('specific_students', 'Specific Students'),
    ]

    name = models.CharField(_('test name'), max_length=200)
    test_type = models.CharField(_('test type'), max_length=20, choices=TEST_TYPE_CHOICES, default='multiple_choice')
    description = models.TextField(_('description'), blank=True)
    instructions = models.TextField(_('instructions'), blank=True)
    center = models.ForeignKey(
        Center,
        on_delete=models.CASCADE,
        related_name='tests',
        verbose_name=_('center')
    )
    subject = models.CharField(_('subject'), max_length=100, blank=True)

    duration_minutes = models.PositiveIntegerField(_('duration (minutes)'), blank=True, null=True)
    total_marks = models.PositiveIntegerField(_('total marks'), default=0)
    passing_marks = models.PositiveIntegerField(_('passing marks'), default=0)

    is_timed = models.BooleanField(_('timed'), default=True)
    shuffle_questions = models.BooleanField(_('shuffle questions'), default=False)
    show_results_immediately = models.BooleanField(_('show results immediately'), default=True)
    allow_retake = models.BooleanField(_('allow retake'), default=False)
    max_retakes = models.PositiveSmallIntegerField(_('max retakes'), default=1)
    assignment_type = models.CharField(
        _('assignment type'), max_length=20, choices=ASSIGNMENT_TYPE_CHOICES, default='specific_students'
    )
    is_active = models.BooleanField(_('active'), default=False)

    start_date = models.DateTimeField(_('available from'), blank=True, null=True)
    end_date = models.DateTimeField(_('available until'), blank=True, null=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_tests',
        verbose_name=_('created by')
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('Test')
        verbose_name_plural = _('Tests')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['center', 'is_active'], name='test_center_active_idx'),
            models.Index(fields=['test_type'], name='test_type_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_test_type_display()})"

    @property
    def is_locked(self):
        """Assigned active tests, and tests with attempts in progress, reject silent edits"""
        if self.is_active and self.assignments.exists():
            return True
        return self.submissions.filter(status='in_progress').exists()

    def is_available(self, now=None):
        now = now or timezone.now()
        if not self.is_active:
            return False
        if self.start_date and now < self.start_date:
            return False
        if self.end_date and now > self.end_date:
            return False
        return True

    def questions_total(self):
        return self.questions.aggregate(total=Sum('marks'))['total'] or 0

    def recalculate_total_marks(self):
        self.total_marks = self.questions_total()
        self.save(update_fields=['total_marks', 'updated_at'])
        return self.total_marks


class Passage(models.Model):
    """Reading passage shared by the questions of a reading_passage test"""

    DIFFICULTY_CHOICES = [
        ('easy', 'Easy'),
        ('medium', 'Medium'),
        ('hard', 'Hard'),
    ]

    test = models.ForeignKey(Test, on_delete=models.CASCADE, related_name='passages', verbose_name=_('test'))
    title = models.CharField(_('title'), max_length=200)
    content = models.TextField(_('content'))
    word_count = models.PositiveIntegerField(_('word count'), blank=True, null=True)
    difficulty_level = models.CharField(_('difficulty level'), max_length=10, choices=DIFFICULTY_CHOICES, default='medium')
    passage_order = models.PositiveIntegerField(_('passage order'), default=1)

    class Meta:
        verbose_name = _('Passage')
        verbose_name_plural = _('Passages')
        ordering = ['test', 'passage_order']

    def __str__(self):
        return f"{self.test.name} - {self.title}"

    def save(self, *args, **kwargs):
        if not self.word_count and self.content:
            self.word_count = len(self.content.split())
        super().save(*args, **kwargs)


class Question(models.Model):
    """A question owned by exactly one test"""

    test = models.ForeignKey(Test, on_delete=models.CASCADE, related_name='questions', verbose_name=_('test'))
    passage = models.ForeignKey(
        Passage,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='questions',
        verbose_name=_('passage')
    )
    question_text = models.TextField(_('question text'))
    question_type = models.CharField(_('question type'), max_length=20, choices=QUESTION_TYPE_CHOICES)
    marks = models.PositiveSmallIntegerField(_('marks'), default=1)
    options = models.JSONField(_('options'), blank=True, null=True)
    correct_answer = models.JSONField(_('correct answer'), blank=True, null=True)
    explanation = models.TextField(_('explanation'), blank=True)
    word_limit = models.PositiveIntegerField(_('word limit'), blank=True, null=True)
    is_required = models.BooleanField(_('required'), default=True)
    question_order = models.PositiveIntegerField(_('question order'), default=1)

    class Meta:
        verbose_name = _('Question')
        verbose_name_plural = _('Questions')
        ordering = ['test', 'question_order', 'id']
        indexes = [
            models.Index(fields=['test', 'question_order'], name='question_test_order_idx'),
        ]

    def __str__(self):
        return f"{self.test.name} - Q{self.question_order}"

    @property
    def is_auto_gradable(self):
        return self.question_type not in ['essay', 'writing']
