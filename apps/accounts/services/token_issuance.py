"""Credential exchange for the JWT pair rating submissions are signed with."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


def issue_tokens(*, email: str, password: str) -> tuple:
    """
    Exchange email and password for a refresh/access token pair.

    The access token carries the user's UUID; a rating submission is only
    accepted when its userId matches that claim.

    Returns:
        (user, {'refresh': str, 'access': str})

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: If account is deactivated
    """
    user = User.objects.filter(email=User.objects.normalize_email(email)).first()

    if user is None or not user.check_password(password):
        logger.info("Rejected login: invalid credentials")
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        logger.info("Rejected login for deactivated user %s", user.pk)
        raise InactiveAccountError("Account is deactivated")

    refresh = RefreshToken.for_user(user)
    update_last_login(None, user)

    return user, {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }
