from decimal import Decimal

import pytest

from assessments.services.exceptions import NotFoundError, StateConflictError, ValidationError
from assessments.services.manual_grading import ManualGradingService
from assessments.services.submission_lifecycle import SubmissionLifecycle


@pytest.fixture
def essay_test(create_test, question_builders):
    """Active test with one multiple-choice question (2 marks) and two essays (5 marks each)"""
    return create_test(questions=[
        question_builders['multiple_choice'](marks=2),
        question_builders['essay'](marks=5, question_text='First essay'),
        question_builders['essay'](marks=5, question_text='Second essay'),
    ])


@pytest.fixture
def pending_submission(essay_test, student, assign_to):
    """A submitted attempt whose essays wait for a grader; the multiple choice answer is correct"""
    assign_to(essay_test, student)
    submission = SubmissionLifecycle.start(essay_test, student)
    mc = essay_test.questions.get(question_type='multiple_choice')
    return SubmissionLifecycle.submit(submission, answers={
        str(mc.pk): {'index': 1},
        **{str(q.pk): 'My essay' for q in essay_test.questions.filter(question_type='essay')},
    })


def essay_ids(test):
    return list(test.questions.filter(question_type='essay').order_by('question_order').values_list('id', flat=True))


@pytest.mark.django_db
@pytest.mark.grading
class TestGradeSubmission:
    """Teacher grading of pending answers"""

    def test_grading_all_pending_answers_finalizes(self, pending_submission, essay_test, teacher_user):
        first, second = essay_ids(essay_test)

        submission = ManualGradingService.grade_submission(
            pending_submission,
            [
                {'question_id': first, 'marks_awarded': 4, 'feedback': 'Good structure'},
                {'question_id': second, 'marks_awarded': 3},
            ],
            grader=teacher_user,
            feedback='Solid work',
        )

        assert submission.status == 'graded'
        assert submission.score == Decimal('9')
        assert submission.percentage == Decimal('75.00')
        assert submission.passed is True
        assert submission.graded_by == teacher_user
        assert submission.graded_by_type == 'teacher'
        assert submission.feedback == 'Solid work'

        answer = submission.answers.get(question_id=first)
        assert answer.is_manually_graded is True
        assert answer.feedback == 'Good structure'
        assert answer.is_correct is False

    def test_partial_grading_keeps_submission_pending(self, pending_submission, essay_test, teacher_user):
        first, _ = essay_ids(essay_test)

        submission = ManualGradingService.grade_submission(
            pending_submission,
            [{'question_id': first, 'marks_awarded': 5}],
            grader=teacher_user,
        )

        assert submission.status == 'submitted'
        assert submission.score is None
        assert submission.answers.get(question_id=first).is_correct is True

    def test_marks_are_clamped_to_question_marks(self, pending_submission, essay_test):
        first, second = essay_ids(essay_test)

        submission = ManualGradingService.grade_submission(
            pending_submission,
            [{'question_id': first, 'marks_awarded': 50}, {'question_id': second, 'marks_awarded': -3}],
        )

        assert submission.answers.get(question_id=first).marks_awarded == Decimal('5')
        assert submission.answers.get(question_id=second).marks_awarded == Decimal('0')
        assert submission.score == Decimal('7')

    def test_marks_obtained_key_accepted(self, pending_submission, essay_test):
        first, second = essay_ids(essay_test)

        submission = ManualGradingService.grade_submission(
            pending_submission,
            [{'question_id': first, 'marks_obtained': '2.5'}, {'question_id': str(second), 'marks_obtained': 1}],
        )
        assert submission.score == Decimal('5.5')

    def test_unknown_question_applies_nothing(self, pending_submission, essay_test):
        first, _ = essay_ids(essay_test)

        with pytest.raises(NotFoundError):
            ManualGradingService.grade_submission(
                pending_submission,
                [{'question_id': first, 'marks_awarded': 5}, {'question_id': 999999, 'marks_awarded': 1}],
            )

        assert pending_submission.answers.get(question_id=first).marks_awarded is None

    def test_non_numeric_marks(self, pending_submission, essay_test):
        first, _ = essay_ids(essay_test)
        with pytest.raises(ValidationError):
            ManualGradingService.grade_submission(pending_submission, [{'question_id': first, 'marks_awarded': 'ten'}])

    def test_duplicate_question(self, pending_submission, essay_test):
        first, _ = essay_ids(essay_test)
        with pytest.raises(ValidationError):
            ManualGradingService.grade_submission(pending_submission, [
                {'question_id': first, 'marks_awarded': 1},
                {'question_id': first, 'marks_awarded': 2},
            ])

    def test_regrade_overrides_auto_grade(self, pending_submission, essay_test):
        first, second = essay_ids(essay_test)
        mc = essay_test.questions.get(question_type='multiple_choice')
        ManualGradingService.grade_submission(pending_submission, [
            {'question_id': first, 'marks_awarded': 5},
            {'question_id': second, 'marks_awarded': 5},
        ])

        submission = ManualGradingService.grade_submission(pending_submission, [{'question_id': mc.pk, 'marks_awarded': 0}])

        assert submission.status == 'graded'
        assert submission.score == Decimal('10')
        assert submission.answers.get(question=mc).is_manually_graded is True

    def test_in_progress_submission_cannot_be_graded(self, essay_test, student, assign_to):
        assign_to(essay_test, student)
        submission = SubmissionLifecycle.start(essay_test, student)
        with pytest.raises(StateConflictError):
            ManualGradingService.grade_submission(submission, [])

    def test_score_is_clamped_to_snapshot_total(self, pending_submission, essay_test):
        """A forced edit can shrink a question after submission; the score never exceeds the snapshot"""
        pending_submission.total_marks = 8
        pending_submission.save()
        first, second = essay_ids(essay_test)

        submission = ManualGradingService.grade_submission(pending_submission, [
            {'question_id': first, 'marks_awarded': 5},
            {'question_id': second, 'marks_awarded': 5},
        ])
        assert submission.score == Decimal('8')
        assert submission.percentage == Decimal('100.00')
