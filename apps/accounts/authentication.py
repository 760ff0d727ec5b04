# apps/accounts/authentication.py

import logging

from django.utils.translation import gettext_lazy as _
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.settings import api_settings

logger = logging.getLogger(__name__)


class ClinicJWTAuthentication(JWTAuthentication):
    """
    Bearer JWT authentication.

    The user is reloaded on every request so a deleted or deactivated
    account loses access immediately; the token only carries the id.
    """

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken(_("Token contained no recognizable user identification"))

        user = (
            self.user_model.objects
            .defer("password")
            .filter(**{api_settings.USER_ID_FIELD: user_id})
            .first()
        )

        if user is None:
            logger.warning(f"Token for unknown user {user_id}")
            raise AuthenticationFailed(_("User not found"), code="user_not_found")

        if not user.is_active:
            raise AuthenticationFailed(_("User is inactive"), code="user_inactive")

        return user
