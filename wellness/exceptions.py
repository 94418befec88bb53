"""
Unified API error envelope.

Every failure raised inside a view is rendered as
``{"success": false, "message": "..."}`` with one of four outcomes:
bad input (400), missing or invalid identity (401), unresolvable
identifier (404) and everything else (500).  An authenticated actor
without the required role still receives 403.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class MediaStoreError(exceptions.APIException):
    """The external media store failed to upload or delete an object."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Media store operation failed'
    default_code = 'media_store_error'


def _flatten(detail, prefix: str = '') -> list[str]:
    if isinstance(detail, dict):
        out: list[str] = []
        for key, value in detail.items():
            label = '' if key in ('non_field_errors', '__all__') else str(key)
            out.extend(_flatten(value, f"{prefix}{label}: " if label else prefix))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for item in detail:
            out.extend(_flatten(item, prefix))
        return out
    return [f"{prefix}{detail}"]


def error_message(exc) -> str:
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        return '; '.join(_flatten(detail)) or 'Validation failed'
    if isinstance(exc, exceptions.APIException):
        return '; '.join(_flatten(exc.detail)) or str(exc.default_detail)
    # Unexpected errors keep their detail in the log only
    return 'Internal server error'


def error_status(exc, resp: Response | None) -> int:
    if isinstance(exc, (DjangoValidationError, exceptions.ValidationError, exceptions.ParseError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return status.HTTP_401_UNAUTHORIZED
    if resp is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    code = resp.status_code
    if code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN, status.HTTP_404_NOT_FOUND):
        return code
    if 400 <= code < 500:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    code = error_status(exc, resp)
    if code >= 500:
        logger.exception('Unhandled API error: %s', exc)
    payload = {'success': False, 'message': error_message(exc)}
    headers = {}
    if resp is not None and code == status.HTTP_401_UNAUTHORIZED:
        www_auth = resp.headers.get('WWW-Authenticate')
        if www_auth:
            headers['WWW-Authenticate'] = www_auth
    return Response(payload, status=code, headers=headers)
