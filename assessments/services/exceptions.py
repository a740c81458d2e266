"""
Domain errors raised by the assessment services.

Each carries the HTTP status it maps to so the API layer can render it
without knowing the service that raised it.
"""


class AssessmentError(Exception):
    status_code = 400
    default_code = 'assessment_error'
    default_message = 'Assessment request failed'

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


class ValidationError(AssessmentError):
    status_code = 400
    default_code = 'validation_error'
    default_message = 'Invalid test definition'


class NotFoundError(AssessmentError):
    status_code = 404
    default_code = 'not_found'
    default_message = 'Not found'


class NotEligibleError(AssessmentError):
    status_code = 403
    default_code = 'not_eligible'
    default_message = 'You are not assigned to take this test'


class RetakeLimitExceededError(AssessmentError):
    status_code = 403
    default_code = 'retake_limit_exceeded'
    default_message = 'Maximum retake limit reached'


class StateConflictError(AssessmentError):
    status_code = 409
    default_code = 'state_conflict'
    default_message = 'Operation not allowed in the current state'


class LateSubmissionError(AssessmentError):
    status_code = 409
    default_code = 'late_submission'
    default_message = 'The time limit for this test has passed'
