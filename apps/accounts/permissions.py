"""
Custom permission classes for accounts app.
"""
import hmac

from django.conf import settings
from rest_framework.permissions import BasePermission


PROVIDER_SECRET_HEADER = 'HTTP_X_PROVIDER_SECRET'


class HasProviderCallbackSecret(BasePermission):
    """
    Allow only the trusted sign-in server that completed the provider handshake.

    The caller sends ``X-Provider-Secret`` matching the
    ``PROVIDER_CALLBACK_SECRET`` secret. When that secret is not configured
    every request is refused.
    """

    message = 'Provider sign in is not allowed.'

    def has_permission(self, request, view):
        expected = settings.SECRETS.get('PROVIDER_CALLBACK_SECRET', default='')
        provided = request.META.get(PROVIDER_SECRET_HEADER, '')
        if not expected or not provided:
            return False
        return hmac.compare_digest(expected.encode(), provided.encode())
