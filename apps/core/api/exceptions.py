"""
REST exception handling.
Business errors become {"error": {...}} payloads; everything else is left to DRF.
"""
import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.core.exceptions import PointsError

logger = logging.getLogger(__name__)


def points_exception_handler(exc, context):
    if isinstance(exc, PointsError):
        request = context.get('request')
        path = request.path if request is not None else None
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__} em {path}: {exc.message}")
        return Response(
            {
                "error": {
                    "code": exc.__class__.__name__,
                    "message": exc.message,
                    "details": exc.details,
                    "path": path,
                }
            },
            status=exc.status_code,
        )
    return exception_handler(exc, context)
