from .user import User, UserManager
from .roster import (
    Center,
    Class,
    Student
)
from .assessment import (
    Test,
    Question,
    Passage
)
from .assignment import Assignment
from .submission import (
    Submission,
    Answer
)

__all__ = [
    'User',
    'UserManager',
    'Center',
    'Class',
    'Student',
    'Test',
    'Question',
    'Passage',
    'Assignment',
    'Submission',
    'Answer'
]
