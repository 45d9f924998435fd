"""
Domain errors raised by the service layer and the DRF exception handler.

Service functions raise DomainError subclasses; views turn them into
``{"error": message}`` responses with the error's status code.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import (
    ValidationError,
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    NotFound,
    MethodNotAllowed,
    ParseError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

REFERENCED_MESSAGE = 'Cannot delete: one or more items are still being referenced.'


class DomainError(Exception):
    """A rule violation that should be reported back to the caller"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class SlugConflictError(DomainError):
    def __init__(self, message='Slug already exists.'):
        super().__init__(message)


class ReferencedError(DomainError):
    """Delete blocked by a foreign key that still points at the row"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message=REFERENCED_MESSAGE, status_code=None):
        super().__init__(message, status_code)


def error_response(exc):
    return Response({'error': exc.message}, status=exc.status_code)


def invalid_fields_response(errors):
    return Response({'error': 'Invalid fields', 'details': errors}, status=status.HTTP_400_BAD_REQUEST)


def custom_exception_handler(exc, context):
    """
    Turn DomainError into ``{"error": ...}`` and sanitize unexpected API errors
    when DEBUG is off. Validation and auth errors keep their messages.
    """
    if isinstance(exc, DomainError):
        return error_response(exc)

    response = exception_handler(exc, context)

    if response is None:
        logger.error(f"Unhandled API exception: {type(exc).__name__}: {exc}", exc_info=True)
        return None

    safe_exceptions = (
        ValidationError,
        AuthenticationFailed,
        NotAuthenticated,
        PermissionDenied,
        NotFound,
        MethodNotAllowed,
        ParseError,
    )
    if isinstance(exc, safe_exceptions):
        return response

    if not settings.DEBUG:
        request = context.get('request')
        logger.error(
            f"API error {type(exc).__name__}: path={request.path if request else 'unknown'}, error={exc}",
            exc_info=True
        )
        response.data = {
            'error': 'An error occurred processing your request.',
            'error_code': type(exc).__name__,
        }

    return response
