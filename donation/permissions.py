"""
Admin gate: a shared-secret check applied to every ``/api/admin/*`` view.

This is a capability check, not a session.  Every call is validated on
its own against ``settings.ADMIN_SECRET``.
"""
import hmac
import logging

from django.conf import settings
from rest_framework.permissions import BasePermission

from .exceptions import Unauthorized

logger = logging.getLogger(__name__)

ADMIN_SECRET_HEADER = 'HTTP_X_ADMIN_SECRET'
ADMIN_SECRET_PARAM = 'adminSecret'


def supplied_secret(request) -> str:
    """Secret from the ``adminSecret`` query parameter or ``X-Admin-Secret`` header."""
    return request.query_params.get(ADMIN_SECRET_PARAM) or request.META.get(ADMIN_SECRET_HEADER) or ''


def secret_matches(candidate: str) -> bool:
    expected = getattr(settings, 'ADMIN_SECRET', '') or ''
    if not expected or not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())


class AdminSecretGate(BasePermission):
    """Allow the call only when the caller supplies the configured admin secret."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if secret_matches(supplied_secret(request)):
            return True
        logger.warning('admin secret rejected for %s %s', request.method, request.path)
        raise Unauthorized()
