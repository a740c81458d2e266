"""
Auto Grader - scores answers whose question type has an objective key
"""
import logging
from decimal import Decimal

from .payloads import (
    SUBJECTIVE_TYPES,
    MatchingAnswer,
    MultipleChoiceAnswer,
    TextAnswer,
    TrueFalseAnswer,
    parse_correct_answer,
    parse_student_answer,
)

logger = logging.getLogger(__name__)


def _multiple_choice(answer: MultipleChoiceAnswer, key: MultipleChoiceAnswer) -> bool:
    if answer.multi:
        return answer.indexes == key.indexes
    return answer.indexes <= key.indexes


def _true_false(answer: TrueFalseAnswer, key: TrueFalseAnswer) -> bool:
    return answer.value == key.value


def _text(answer: TextAnswer, key: TextAnswer) -> bool:
    return any(text in key.texts for text in answer.texts)


def _matching(answer: MatchingAnswer, key: MatchingAnswer) -> bool:
    # All pairs must match; partial credit is not awarded.
    return all(answer.matches.get(index) == right for index, right in key.matches.items())


_COMPARATORS = {
    MultipleChoiceAnswer: _multiple_choice,
    TrueFalseAnswer: _true_false,
    TextAnswer: _text,
    MatchingAnswer: _matching,
}


class GradeResult:
    """Outcome for one answer. ``None`` fields mean manual grading is required."""

    __slots__ = ('is_correct', 'marks_awarded')

    def __init__(self, is_correct=None, marks_awarded=None):
        self.is_correct = is_correct
        self.marks_awarded = marks_awarded

    @property
    def is_resolved(self):
        return self.marks_awarded is not None

    def __repr__(self):
        return f"GradeResult(is_correct={self.is_correct}, marks_awarded={self.marks_awarded})"


class AutoGrader:
    """Structural comparison between a student's payload and the answer key"""

    @classmethod
    def can_grade(cls, question_type: str) -> bool:
        return question_type not in SUBJECTIVE_TYPES

    @classmethod
    def check(cls, question_type: str, student_answer, correct_answer) -> bool:
        """
        Whether ``student_answer`` is correct. Malformed payloads on either
        side are simply incorrect.
        """
        answer = parse_student_answer(question_type, student_answer)
        key = parse_correct_answer(question_type, correct_answer)
        if answer is None or key is None or type(answer) is not type(key):
            return False
        return _COMPARATORS[type(key)](answer, key)

    @classmethod
    def grade(cls, question, student_answer, marks=None) -> GradeResult:
        """Score one answer; ``marks`` overrides the question's current marks"""
        if not cls.can_grade(question.question_type):
            return GradeResult()

        try:
            is_correct = cls.check(question.question_type, student_answer, question.correct_answer)
        except Exception:
            logger.exception("Auto-grading failed for question %s; scoring as incorrect", question.pk)
            is_correct = False

        full_marks = Decimal(question.marks if marks is None else marks)
        return GradeResult(is_correct=is_correct, marks_awarded=full_marks if is_correct else Decimal('0'))
