from decimal import Decimal

import pytest

from assessments.models import Question
from assessments.services.auto_grader import AutoGrader


def make_question(question_type, correct_answer=None, marks=2, options=None):
    """Unsaved question; grading only reads its fields"""
    return Question(
        question_text='Q',
        question_type=question_type,
        marks=marks,
        options=options,
        correct_answer=correct_answer,
    )


@pytest.mark.grading
class TestAutoGraderCheck:
    """Structural comparison per question type"""

    def test_multiple_choice_single_key(self):
        assert AutoGrader.check('multiple_choice', {'index': 1}, {'index': 1})
        assert not AutoGrader.check('multiple_choice', {'index': 2}, {'index': 1})

    def test_multiple_choice_selected_alias(self):
        assert AutoGrader.check('multiple_choice', {'selected': 1}, {'index': 1})

    def test_multiple_choice_any_of_several_correct_options(self):
        assert AutoGrader.check('multiple_choice', {'index': 3}, {'indexes': [1, 3]})

    def test_multiple_choice_multi_select_is_all_or_nothing(self):
        assert AutoGrader.check('multiple_choice', {'indexes': [3, 1]}, {'indexes': [1, 3]})
        assert not AutoGrader.check('multiple_choice', {'indexes': [1]}, {'indexes': [1, 3]})
        assert AutoGrader.check('multiple_choice', {'selected': [1, 3]}, {'indexes': [1, 3]})
        assert not AutoGrader.check('multiple_choice', {'indexes': [0, 1, 3]}, {'indexes': [1, 3]})

    def test_true_false(self):
        assert AutoGrader.check('true_false', {'value': False}, {'value': False})
        assert not AutoGrader.check('true_false', {'value': True}, {'value': False})

    def test_text_case_and_whitespace_insensitive(self):
        key = {'answers': ['Paris', 'Paris, France']}
        assert AutoGrader.check('short_answer', {'text': '  paris  '}, key)
        assert AutoGrader.check('form_filling', {'answer': 'PARIS, FRANCE'}, key)
        assert not AutoGrader.check('short_answer', {'text': 'Lyon'}, key)

    def test_matching_every_pair_must_match(self):
        key = {'pairs': [{'left': 'hot', 'right': 'cold'}, {'left': 'up', 'right': 'down'}]}
        assert AutoGrader.check('matching', {'matches': {'0': 'Cold', '1': 'DOWN'}}, key)
        assert not AutoGrader.check('matching', {'matches': {'0': 'cold'}}, key)
        assert not AutoGrader.check('matching', {'matches': {'0': 'cold', '1': 'up'}}, key)

    @pytest.mark.parametrize('payload', [None, 'B', 3, {'wrong': 1}, {'index': 'one'}, []])
    def test_malformed_payload_is_incorrect(self, payload):
        assert AutoGrader.check('multiple_choice', payload, {'index': 1}) is False

    def test_malformed_key_is_incorrect(self):
        assert AutoGrader.check('true_false', {'value': True}, None) is False


@pytest.mark.grading
class TestAutoGraderGrade:
    """Marks awarded per answer"""

    def test_correct_answer_gets_full_marks(self):
        result = AutoGrader.grade(make_question('true_false', {'value': True}, marks=3), {'value': True})
        assert result.is_correct is True
        assert result.marks_awarded == Decimal('3')

    def test_wrong_answer_gets_zero(self):
        result = AutoGrader.grade(make_question('short_answer', {'answers': ['go']}), {'text': 'went'})
        assert result.is_correct is False
        assert result.marks_awarded == Decimal('0')

    def test_missing_answer_scores_zero(self):
        result = AutoGrader.grade(make_question('multiple_choice', {'index': 0}, options=['a', 'b']), None)
        assert result.is_resolved
        assert result.marks_awarded == Decimal('0')

    @pytest.mark.parametrize('question_type', ['essay', 'writing'])
    def test_subjective_types_are_left_for_manual_grading(self, question_type):
        result = AutoGrader.grade(make_question(question_type), 'Some long text')
        assert result.is_correct is None
        assert result.marks_awarded is None
        assert not result.is_resolved
