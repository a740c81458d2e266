"""
Answer payloads, typed by question type.

Both ``student_answer`` and ``correct_answer`` are stored as plain JSON. This
module turns them into one variant per question type so grading never has to
probe dictionaries for keys. Parsing never raises: a payload that does not
fit its type's shape parses to ``None``.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from .exceptions import ValidationError


OBJECTIVE_TYPES = ['multiple_choice', 'true_false', 'short_answer', 'form_filling', 'matching']
SUBJECTIVE_TYPES = ['essay', 'writing']
QUESTION_TYPES = OBJECTIVE_TYPES + SUBJECTIVE_TYPES
OPTION_TYPES = ['multiple_choice', 'true_false']


@dataclass(frozen=True)
class MultipleChoiceAnswer:
    indexes: FrozenSet[int]
    multi: bool = False


@dataclass(frozen=True)
class TrueFalseAnswer:
    value: bool


@dataclass(frozen=True)
class TextAnswer:
    texts: Tuple[str, ...]


@dataclass(frozen=True)
class MatchingAnswer:
    matches: Dict[int, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FreeTextAnswer:
    text: str


def normalize_text(value) -> str:
    return str(value or '').strip().lower()


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _text_list(values) -> Optional[Tuple[str, ...]]:
    if not isinstance(values, (list, tuple)):
        return None
    texts = tuple(normalize_text(v) for v in values if isinstance(v, str) and v.strip())
    return texts or None


# Student payloads

def _student_multiple_choice(payload):
    # A list under ``selected`` is a multi-select answer
    if 'indexes' in payload or isinstance(payload.get('selected'), (list, tuple)):
        indexes = payload['indexes'] if 'indexes' in payload else payload['selected']
        if not isinstance(indexes, (list, tuple)) or not indexes or not all(_is_index(i) for i in indexes):
            return None
        return MultipleChoiceAnswer(frozenset(indexes), multi=True)
    index = payload.get('index', payload.get('selected'))
    if not _is_index(index):
        return None
    return MultipleChoiceAnswer(frozenset([index]))


def _student_true_false(payload):
    value = payload.get('value')
    if not isinstance(value, bool):
        return None
    return TrueFalseAnswer(value)


def _student_text(payload):
    text = payload.get('text', payload.get('answer'))
    if not isinstance(text, str) or not text.strip():
        return None
    return TextAnswer((normalize_text(text),))


def _student_matching(payload):
    matches = payload.get('matches')
    if not isinstance(matches, dict):
        return None
    parsed = {}
    for key, value in matches.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            return None
        if index < 0 or not isinstance(value, str):
            return None
        parsed[index] = normalize_text(value)
    return MatchingAnswer(parsed)


def _student_free_text(payload):
    text = payload.get('text', payload.get('answer'))
    if not isinstance(text, str):
        return None
    return FreeTextAnswer(text)


_STUDENT_PARSERS = {
    'multiple_choice': _student_multiple_choice,
    'true_false': _student_true_false,
    'short_answer': _student_text,
    'form_filling': _student_text,
    'matching': _student_matching,
    'essay': _student_free_text,
    'writing': _student_free_text,
}


def parse_student_answer(question_type, payload):
    if isinstance(payload, str) and question_type in SUBJECTIVE_TYPES:
        return FreeTextAnswer(payload)
    if not isinstance(payload, dict):
        return None
    parser = _STUDENT_PARSERS.get(question_type)
    return parser(payload) if parser else None


# Answer keys

def _key_multiple_choice(payload):
    if 'indexes' in payload:
        indexes = payload['indexes']
        if not isinstance(indexes, (list, tuple)) or not indexes or not all(_is_index(i) for i in indexes):
            return None
        return MultipleChoiceAnswer(frozenset(indexes), multi=True)
    index = payload.get('index')
    if not _is_index(index):
        return None
    return MultipleChoiceAnswer(frozenset([index]))


def _key_text(payload):
    for key in ('answers', 'keywords'):
        if key in payload:
            texts = _text_list(payload[key])
            return TextAnswer(texts) if texts else None
    for key in ('answer', 'text'):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return TextAnswer((normalize_text(value),))
    return None


def _key_matching(payload):
    pairs = payload.get('pairs')
    if not isinstance(pairs, (list, tuple)) or not pairs:
        return None
    parsed = {}
    for index, pair in enumerate(pairs):
        if not isinstance(pair, dict) or not isinstance(pair.get('right'), str):
            return None
        parsed[index] = normalize_text(pair['right'])
    return MatchingAnswer(parsed)


_KEY_PARSERS = {
    'multiple_choice': _key_multiple_choice,
    'true_false': _student_true_false,
    'short_answer': _key_text,
    'form_filling': _key_text,
    'matching': _key_matching,
}


def parse_correct_answer(question_type, payload):
    if not isinstance(payload, dict):
        return None
    parser = _KEY_PARSERS.get(question_type)
    return parser(payload) if parser else None


def validate_question(data, label='Question'):
    """
    Check one question definition. ``data`` is a plain mapping as received
    from the API; raises ValidationError on the first problem found.
    """
    question_type = data.get('question_type')
    if question_type not in QUESTION_TYPES:
        raise ValidationError(f"{label}: unsupported question type '{question_type}'")

    if not str(data.get('question_text') or '').strip():
        raise ValidationError(f"{label}: question text is required")

    marks = data.get('marks', 1)
    if not isinstance(marks, int) or isinstance(marks, bool) or marks <= 0:
        raise ValidationError(f"{label}: marks must be a positive integer")

    word_limit = data.get('word_limit')
    if word_limit is not None and (not isinstance(word_limit, int) or isinstance(word_limit, bool) or word_limit <= 0):
        raise ValidationError(f"{label}: word limit must be a positive integer")

    options = data.get('options')
    if question_type in OPTION_TYPES:
        if not isinstance(options, (list, tuple)) or len(options) < 2:
            raise ValidationError(f"{label}: at least two options are required for {question_type} questions")

    if question_type in SUBJECTIVE_TYPES:
        return

    key = parse_correct_answer(question_type, data.get('correct_answer'))
    if key is None:
        raise ValidationError(f"{label}: correct answer does not match the {question_type} shape")

    if question_type == 'multiple_choice' and max(key.indexes) >= len(options):
        raise ValidationError(f"{label}: correct answer refers to an option that does not exist")
