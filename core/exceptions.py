# core/exceptions.py

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.views import exception_handler

from .responses import GENERAL_ERROR, REQUIRED_FIELDS, send_error, send_invalid_fields

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto the response envelope."""

    message = GENERAL_ERROR[0]
    tag = GENERAL_ERROR[1]
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None, tag=None, status_code=None):
        self.message = message or self.message
        self.tag = tag or self.tag
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(ApiError):
    message = 'The requested record was not found.'
    tag = 'api.not_found'
    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(ApiError):
    message = 'You must be logged in to perform this action.'
    tag = 'api.unauthorized'
    status_code = status.HTTP_401_UNAUTHORIZED


class SubmissionError(ApiError):
    """Failure inside the submission transaction. Keeps the raw error for logs."""

    tag = 'api.submission_failed'

    def __init__(self, message, original=None):
        super().__init__(message)
        self.original = original


class IntegrationError(Exception):
    """An external collaborator (storage, AI, payments, GitHub) failed."""

    def __init__(self, service, message, status_code=None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class ReformatError(Exception):
    """The reformatting job cannot proceed for business reasons."""


def flatten_errors(detail, prefix=''):
    """Turn DRF's nested error detail into {dotted.field: first message}."""
    flat = {}
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            flat.update(flatten_errors(value, name))
    elif isinstance(detail, list):
        if detail and all(not isinstance(item, (dict, list)) for item in detail):
            flat[prefix or 'non_field_errors'] = str(detail[0])
        else:
            for index, item in enumerate(detail):
                name = f"{prefix}.{index}" if prefix else str(index)
                flat.update(flatten_errors(item, name))
    else:
        flat[prefix or 'non_field_errors'] = str(detail)
    return flat


def api_exception_handler(exc, context):
    """DRF exception handler that always answers with the status envelope."""
    if isinstance(exc, ApiError):
        return send_error(exc.message, exc.tag, exc.status_code)

    if isinstance(exc, drf_exceptions.ValidationError):
        return send_invalid_fields(flatten_errors(exc.detail), REQUIRED_FIELDS[0], REQUIRED_FIELDS[1])

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get('detail') if isinstance(response.data, dict) else None
        tag = f"api.{getattr(exc, 'default_code', 'error')}"
        wrapped = send_error(str(detail or GENERAL_ERROR[0]), tag, response.status_code)
        if 'WWW-Authenticate' in response:
            wrapped['WWW-Authenticate'] = response['WWW-Authenticate']
        return wrapped

    view = context.get('view')
    logger.exception(
        "Unhandled API error",
        extra={'view': view.__class__.__name__ if view else None, 'error': str(exc)},
    )
    return send_error(GENERAL_ERROR[0], GENERAL_ERROR[1], status.HTTP_500_INTERNAL_SERVER_ERROR)
