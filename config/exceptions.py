"""
DRF exception handler.

Errors DRF knows about (validation, auth, APIException subclasses) keep
DRF's responses. Anything else is logged with its traceback and turned
into a 500 JSON body: the exception text with DEBUG on, a generic message
with DEBUG off.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'An error occurred. Please try again.'


def sanitize_error(exc) -> str:
    """Message safe to show to the client."""
    if settings.DEBUG:
        return str(exc) or 'Internal server error'
    return GENERIC_ERROR_MESSAGE


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled error in %s",
        view.__class__.__name__ if view is not None else 'unknown view',
        exc_info=exc,
    )
    return Response(
        {'error': sanitize_error(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
