"""
Manual Grading Service - teacher marks, overrides and finalization
"""
import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from assessments.models import Submission

from .exceptions import NotFoundError, StateConflictError, ValidationError

logger = logging.getLogger(__name__)

GRADABLE_STATUSES = ['submitted', 'graded']


def _parse_marks(entry, position):
    raw = entry.get('marks_awarded', entry.get('marks_obtained'))
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"Grade {position}: marks_awarded is required")
    try:
        marks = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Grade {position}: marks_awarded must be a number")
    if not marks.is_finite():
        raise ValidationError(f"Grade {position}: marks_awarded must be a number")
    return marks


class ManualGradingService:

    @classmethod
    def grade_submission(cls, submission: Submission, answer_grades, grader=None, feedback=None, now=None) -> Submission:
        """
        Apply ``answer_grades`` (``[{question_id, marks_awarded, feedback}]``)
        to a submitted or graded submission.

        The call is all-or-nothing: every entry is checked before any answer
        is written. Marks are clamped to ``[0, marks]``, using what the
        question was worth when the attempt started. The submission only
        becomes ``graded`` once no answer is left without marks.

        Two graders writing the same submission concurrently: last write wins.
        """
        now = now or timezone.now()
        if not isinstance(answer_grades, (list, tuple)):
            raise ValidationError("answer_grades must be a list")

        with transaction.atomic():
            submission = Submission.objects.select_for_update().get(pk=submission.pk)
            if submission.status not in GRADABLE_STATUSES:
                raise StateConflictError(f"Cannot grade a submission that is {submission.status}")

            answers = {
                str(answer.question_id): answer
                for answer in submission.answers.select_related('question')
            }

            planned = []
            seen = set()
            for position, entry in enumerate(answer_grades, start=1):
                if not isinstance(entry, dict):
                    raise ValidationError(f"Grade {position}: expected an object")
                question_id = str(entry.get('question_id'))
                answer = answers.get(question_id)
                if answer is None:
                    raise NotFoundError(f"Question {entry.get('question_id')} is not part of this submission")
                if question_id in seen:
                    raise ValidationError(f"Question {question_id} is graded more than once")
                seen.add(question_id)

                full_marks = Decimal(submission.marks_for(answer.question))
                marks = min(max(_parse_marks(entry, position), Decimal('0')), full_marks)
                planned.append((answer, marks, full_marks, entry.get('feedback')))

            for answer, marks, full_marks, answer_feedback in planned:
                answer.marks_awarded = marks
                answer.is_correct = marks == full_marks
                if answer_feedback is not None:
                    answer.feedback = answer_feedback
                answer.is_manually_graded = True
                answer.graded_at = now
                answer.save()

            if feedback is not None:
                submission.feedback = feedback

            if submission.has_pending_answers:
                submission.save()
                logger.info(
                    "Submission %s partially graded by %s; answers still pending",
                    submission.pk, getattr(grader, 'pk', None)
                )
                return submission

            cls.finalize(submission, grader=grader, now=now)

        logger.info("Submission %s graded by %s: %s/%s", submission.pk, getattr(grader, 'pk', None),
                    submission.score, submission.total_marks)
        return submission

    @classmethod
    def finalize(cls, submission: Submission, grader=None, now=None) -> Submission:
        """Freeze the score once every answer carries marks"""
        now = now or timezone.now()
        score = submission.clamp_score(submission.awarded_total())

        submission.score = score
        submission.percentage = submission.percentage_for(score)
        submission.passed = score >= submission.passing_marks
        submission.status = 'graded'
        submission.graded_at = now
        submission.graded_by = grader
        submission.graded_by_type = getattr(grader, 'user_type', '') or ''
        submission.save()
        return submission
