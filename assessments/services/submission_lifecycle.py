"""
Submission Lifecycle - start, progress, submit

States only move forward: not_started -> in_progress -> submitted -> graded.
The move to ``graded`` belongs to ManualGradingService.
"""
import logging
import random
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone

from assessments.models import Answer, Submission, Test
from assessments.models.submission import OPEN_STATUSES

from .assignment_fanout import AssignmentFanOut
from .auto_grader import AutoGrader
from .exceptions import (
    LateSubmissionError,
    NotEligibleError,
    NotFoundError,
    RetakeLimitExceededError,
    StateConflictError,
    ValidationError,
)
from .manual_grading import ManualGradingService

logger = logging.getLogger(__name__)


class SubmissionLifecycle:

    @classmethod
    def start(cls, test: Test, student, ip_address=None, now=None) -> Submission:
        """
        Begin (or resume) an attempt.

        An open attempt is returned unchanged, so repeated calls never create
        duplicates.
        """
        now = now or timezone.now()

        if not test.is_available(now):
            raise NotEligibleError("This test is not currently available")
        if AssignmentFanOut.covering_assignment(test, student) is None:
            raise NotEligibleError()

        try:
            with transaction.atomic():
                # Serializes concurrent starts for the same test.
                Test.objects.select_for_update().filter(pk=test.pk).first()

                attempts = Submission.objects.filter(test=test, student=student)
                open_attempt = attempts.filter(status__in=OPEN_STATUSES).first()
                if open_attempt is not None:
                    return open_attempt

                previous = attempts.aggregate(last=Max('attempt_number'))['last'] or 0
                attempt_number = previous + 1
                if previous:
                    if not test.allow_retake:
                        raise RetakeLimitExceededError("Retakes are not allowed for this test")
                    if attempt_number - 1 > test.max_retakes:
                        raise RetakeLimitExceededError()

                questions = list(test.questions.order_by('question_order', 'id').values_list('id', 'marks'))
                question_ids = [pk for pk, _ in questions]
                if test.shuffle_questions:
                    random.shuffle(question_ids)

                submission = Submission.objects.create(
                    test=test,
                    student=student,
                    status='in_progress',
                    attempt_number=attempt_number,
                    started_at=now,
                    total_marks=test.total_marks,
                    passing_marks=test.passing_marks,
                    question_order=question_ids,
                    question_marks={str(pk): marks for pk, marks in questions},
                    ip_address=ip_address,
                )
        except IntegrityError:
            # Lost a race with another start for the same student.
            winner = Submission.objects.filter(test=test, student=student, status__in=OPEN_STATUSES).first()
            if winner is None:
                raise StateConflictError("Another attempt was started at the same time")
            return winner

        logger.info(
            "Submission %s started: test=%s student=%s attempt=%s",
            submission.pk, test.pk, student.pk, attempt_number
        )
        return submission

    @classmethod
    def save_progress(cls, submission: Submission, question_id, payload) -> Submission:
        """Overwrite the in-progress draft for one question"""
        with transaction.atomic():
            submission = Submission.objects.select_for_update().get(pk=submission.pk)
            if submission.status != 'in_progress':
                raise StateConflictError(f"Cannot save progress on a {submission.status} submission")
            if not submission.test.questions.filter(pk=question_id).exists():
                raise NotFoundError(f"Question {question_id} not found on this test")

            drafts = dict(submission.draft_answers or {})
            drafts[str(question_id)] = payload
            submission.draft_answers = drafts
            submission.save(update_fields=['draft_answers', 'updated_at'])
        return submission

    @classmethod
    def deadline(cls, submission: Submission):
        test = submission.test
        if not test.is_timed or not test.duration_minutes or not submission.started_at:
            return None
        return submission.started_at + timedelta(minutes=test.duration_minutes)

    @classmethod
    def seconds_remaining(cls, submission: Submission, now=None):
        deadline = cls.deadline(submission)
        if deadline is None or submission.status != 'in_progress':
            return None
        now = now or timezone.now()
        return max(0, int((deadline - now).total_seconds()))

    @classmethod
    def is_late(cls, submission: Submission, now=None) -> bool:
        deadline = cls.deadline(submission)
        if deadline is None:
            return False
        grace = timedelta(seconds=getattr(settings, 'ASSESSMENT_SUBMIT_GRACE_SECONDS', 0))
        now = now or timezone.now()
        return now > deadline + grace

    @classmethod
    def submit(cls, submission: Submission, answers=None, forced=False, now=None) -> Submission:
        """
        Materialize answers, auto-grade them and close the attempt.

        ``answers`` maps question id to payload and is laid over any saved
        drafts. Unanswered questions are stored with a null payload. A
        ``forced`` submit (timer expiry) skips the deadline check.
        """
        now = now or timezone.now()
        if answers is not None and not isinstance(answers, dict):
            raise ValidationError("Answers must be a mapping of question id to answer")

        with transaction.atomic():
            submission = Submission.objects.select_for_update().select_related('test').get(pk=submission.pk)
            if submission.status != 'in_progress':
                raise StateConflictError(f"This submission is already {submission.status}")

            if not forced and cls.is_late(submission, now):
                logger.warning("Late submission %s rejected", submission.pk)
                raise LateSubmissionError()

            supplied = dict(submission.draft_answers or {})
            supplied.update({str(k): v for k, v in (answers or {}).items()})

            # Only the questions frozen at start are answered, at the marks they had then
            questions = submission.test.questions.all()
            if submission.question_order is not None:
                questions = questions.filter(pk__in=submission.question_order)

            auto_score = Decimal('0')
            for question in questions:
                payload = supplied.get(str(question.pk))
                result = AutoGrader.grade(question, payload, marks=submission.marks_for(question))
                Answer.objects.create(
                    submission=submission,
                    question=question,
                    student_answer=payload,
                    is_correct=result.is_correct,
                    marks_awarded=result.marks_awarded,
                    graded_at=now if result.is_resolved else None,
                )
                if result.is_resolved:
                    auto_score += result.marks_awarded

            submission.status = 'submitted'
            submission.submitted_at = now
            submission.was_forced = bool(forced)
            submission.auto_score = auto_score
            submission.draft_answers = {}
            if submission.started_at:
                submission.time_taken_seconds = max(0, int((now - submission.started_at).total_seconds()))
            submission.save()

            if not submission.has_pending_answers:
                ManualGradingService.finalize(submission, now=now)

        logger.info(
            "Submission %s submitted (forced=%s): auto score %s/%s, status %s",
            submission.pk, forced, auto_score, submission.total_marks, submission.status
        )
        return submission
