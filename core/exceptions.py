# core/exceptions.py

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


# =========================
# Tenancy failures
# =========================

class BranchAccessDenied(exceptions.PermissionDenied):
    default_detail = 'Branch access denied.'
    default_code = 'branch_access_denied'


class NoClinicAssigned(exceptions.PermissionDenied):
    default_detail = 'User is not assigned to any clinic.'
    default_code = 'no_clinic'


class MissingBranchContext(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'No active branch context.'
    default_code = 'no_branch_context'


class InvalidBranchHeader(exceptions.ParseError):
    default_detail = 'Invalid X-Branch-Id header.'
    default_code = 'invalid_branch_header'


# =========================
# Domain failures
# =========================

class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource conflict.'
    default_code = 'conflict'


class LastBranchProtected(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Action denied. You must maintain at least one active branch.'
    default_code = 'last_branch'


class InsufficientStock(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Insufficient stock.'
    default_code = 'insufficient_stock'


# =========================
# Response rendering
# =========================

ERROR_KINDS = {
    status.HTTP_400_BAD_REQUEST: 'bad_request',
    status.HTTP_401_UNAUTHORIZED: 'unauthenticated',
    status.HTTP_403_FORBIDDEN: 'forbidden',
    status.HTTP_404_NOT_FOUND: 'not_found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'bad_request',
    status.HTTP_409_CONFLICT: 'conflict',
}


def error_kind(status_code):
    if status_code >= 500:
        return 'server_error'
    return ERROR_KINDS.get(status_code, 'bad_request')


def api_exception_handler(exc, context):
    """
    Render every failure as {"error": <kind>, "detail": <message>}.
    Stack detail stays in the server log.
    """
    # Deferred: rest_framework.views imports the configured permission classes
    from rest_framework.views import exception_handler

    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(
            exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        )
    elif isinstance(exc, ProtectedError):
        exc = Conflict('Resource is still referenced by other records.')
    elif isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error: {exc}")
        exc = Conflict('Resource conflicts with an existing record.')

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}",
            exc_info=exc,
        )
        return Response(
            {'error': 'server_error', 'detail': 'Server Error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data
    if isinstance(detail, dict) and set(detail.keys()) == {'detail'}:
        detail = detail['detail']

    response.data = {
        'error': error_kind(response.status_code),
        'detail': detail,
    }
    return response
