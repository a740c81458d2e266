from .test import TestViewSet, QuestionViewSet, PassageViewSet
from .submission import SubmissionViewSet
from .results import assigned_tests, student_submissions, student_results, student_summary

__all__ = [
    'TestViewSet',
    'QuestionViewSet',
    'PassageViewSet',
    'SubmissionViewSet',
    'assigned_tests',
    'student_submissions',
    'student_results',
    'student_summary'
]
