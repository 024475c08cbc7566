"""
Failure types raised by the lifecycle services and the unified handler
that renders them (and every other DRF error) as
``{"ok": false, "error": {"code": ..., "message": ...}}``.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class InvalidInput(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'missing or invalid field'
    default_code = 'invalid_input'


class Unauthorized(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'


class Forbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'not permitted for this role'
    default_code = 'forbidden'


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'not found'
    default_code = 'not_found'


class DuplicatePhone(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Phone already registered'
    default_code = 'duplicate_phone'


class DuplicateUserId(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'userId already taken'
    default_code = 'duplicate_user_id'


class DuplicatePending(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'You already have a pending request.'
    default_code = 'duplicate_pending'


class AlreadyResolved(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'request already resolved'
    default_code = 'already_resolved'


class StoreFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'storage failure'
    default_code = 'store_failure'


# DRF's own exceptions (and Http404/PermissionDenied it converts) fold into these.
STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: 'invalid_input',
    status.HTTP_401_UNAUTHORIZED: 'unauthorized',
    status.HTTP_403_FORBIDDEN: 'forbidden',
    status.HTTP_404_NOT_FOUND: 'not_found',
}


def _error_code(exc, resp) -> str:
    if resp.status_code in STATUS_CODES:
        return STATUS_CODES[resp.status_code]
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        if isinstance(codes, str):
            return codes
    return 'api_error'


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        request = context.get('request')
        logger.exception('store failure on %s', getattr(request, 'path', '?'))
        exc = StoreFailure()
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error: %s', exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return Response({'ok': False, 'error': {'code': _error_code(exc, resp), 'message': detail}}, status=resp.status_code, headers=headers)
