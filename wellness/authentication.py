"""
Static token authentication for service clients (``Token <key>``).

Mobile and web clients send Bearer JWTs, which ``rest_framework_simplejwt``
handles; this class covers integrations issued a long-lived DRF token.
"""
from __future__ import annotations

import logging

from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)


class TokenAuthentication(authentication.TokenAuthentication):
    keyword = 'Token'

    def authenticate_credentials(self, key):
        model = self.get_model()
        token = model.objects.select_related('user').filter(key=key).first()
        if token is None:
            logger.warning('Rejected unknown API token %s...', key[:6])
            raise exceptions.AuthenticationFailed('Invalid token')
        if not token.user.is_active:
            logger.warning('Rejected API token of inactive user %s', token.user_id)
            raise exceptions.AuthenticationFailed('User account is disabled')
        return token.user, token
