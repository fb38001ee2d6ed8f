"""
Social identity service.

The OAuth handshake happens outside this project. Once a provider has
verified who the user is, the caller hands over the provider name, the
provider's stable subject id and the verified email, and gets back the
matching local User. The trusted sign-in server reaches it through
``POST /api/auth/provider/`` (see ``views.provider_sign_in``).
"""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import IdentityConflictError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def sign_in_with_provider(
    *,
    provider: str,
    subject: str,
    email: str,
    display_name: str = ""
) -> User:
    """
    Find or create the user for a verified provider identity.

    Lookup order:
    1. Existing (provider, subject) pair
    2. Existing account with the same email and no linked identity,
       which gets linked
    3. New account with an unusable password

    Args:
        provider: AuthProvider value, e.g. 'google'
        subject: Provider's stable user id
        email: Email verified by the provider
        display_name: Name reported by the provider

    Returns:
        User instance with last_login updated

    Raises:
        IdentityConflictError: If the email belongs to another identity
        InactiveAccountError: If the account is deactivated
    """
    email = User.objects.normalize_email(email)

    user = (
        User.objects
        .select_for_update()
        .filter(auth_provider=provider, provider_subject=subject)
        .first()
    )

    if user is None:
        user = User.objects.select_for_update().filter(email__iexact=email).first()
        if user is not None:
            if user.provider_subject:
                raise IdentityConflictError("Email is linked to another account")
            user.auth_provider = provider
            user.provider_subject = subject
            user.save(update_fields=['auth_provider', 'provider_subject'])
            logger.info("Linked %s identity to user %s", provider, user.id)
        else:
            user = User.objects.create_user(
                email=email,
                display_name=display_name,
                auth_provider=provider,
                provider_subject=subject,
            )
            logger.info("Created user %s from %s sign in", user.id, provider)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
