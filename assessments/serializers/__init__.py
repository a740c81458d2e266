from .question import (
    QuestionSerializer,
    StudentQuestionSerializer,
    QuestionInputSerializer,
    QuestionUpdateSerializer,
    PassageSerializer
)
from .assignment import (
    AssignmentSerializer,
    AssignmentRequestSerializer,
    AssignTestSerializer,
    AssignedTestSerializer
)
from .test import (
    TestSerializer,
    TestDetailSerializer,
    TestWriteSerializer
)
from .submission import (
    AnswerSerializer,
    SubmissionSerializer,
    SubmissionDetailSerializer,
    StartTestSerializer,
    SaveProgressSerializer,
    SubmitSerializer,
    GradeSubmissionSerializer
)
from .results import (
    TestResultsSerializer,
    StudentResultSerializer,
    TestSummarySerializer
)

__all__ = [
    'QuestionSerializer',
    'StudentQuestionSerializer',
    'QuestionInputSerializer',
    'QuestionUpdateSerializer',
    'PassageSerializer',
    'AssignmentSerializer',
    'AssignmentRequestSerializer',
    'AssignTestSerializer',
    'AssignedTestSerializer',
    'TestSerializer',
    'TestDetailSerializer',
    'TestWriteSerializer',
    'AnswerSerializer',
    'SubmissionSerializer',
    'SubmissionDetailSerializer',
    'StartTestSerializer',
    'SaveProgressSerializer',
    'SubmitSerializer',
    'GradeSubmissionSerializer',
    'TestResultsSerializer',
    'StudentResultSerializer',
    'TestSummarySerializer'
]
