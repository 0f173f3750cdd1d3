# accounts/authentication.py

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from jose import JWTError, jwt
from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)

User = get_user_model()


def decode_token(token):
    """Decode a bearer token and return its claims. Raises JWTError when invalid."""
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def create_token(user_id, **claims):
    """Issue a token for ``user_id``. Used by fixtures and administrative scripts."""
    payload = {'sub': str(user_id), **claims}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    Resolves ``Authorization: Bearer <token>`` to a Django user.

    No header means an anonymous caller. A header that cannot be decoded,
    or whose subject does not match an active user, is rejected with 401.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed('Invalid authorization header.')

        try:
            token = header[1].decode()
            claims = decode_token(token)
        except (UnicodeError, JWTError) as exc:
            logger.info("Rejected bearer token", extra={'error': str(exc)})
            raise exceptions.AuthenticationFailed('Invalid or expired token.')

        subject = claims.get('sub')
        if not subject:
            raise exceptions.AuthenticationFailed('Token has no subject.')

        try:
            user = User.objects.get(pk=subject, is_active=True)
        except (User.DoesNotExist, ValueError):
            raise exceptions.AuthenticationFailed('User not found.')

        return user, claims

    def authenticate_header(self, request):
        return self.keyword


def extract_user_id(request):
    """Return the authenticated caller's id, or None for anonymous callers."""
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user.pk
    return None
