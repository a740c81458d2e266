import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from assessments.services.exceptions import AssessmentError

logger = logging.getLogger(__name__)


def assessment_exception_handler(exc, context):
    """
    Render service errors as ``{'error': message, 'code': code}`` with the
    status they carry. Anything else goes through DRF's default handler.
    """
    if isinstance(exc, AssessmentError):
        view = context.get('view')
        logger.info(
            "%s in %s: %s",
            exc.__class__.__name__, view.__class__.__name__ if view else 'unknown view', exc.message
        )
        return Response({'error': exc.message, 'code': exc.code}, status=exc.status_code)

    return drf_exception_handler(exc, context)
