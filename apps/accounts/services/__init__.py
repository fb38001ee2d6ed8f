"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    IdentityConflictError,
)
from .user_authentication import authenticate_user
from .social_identity import sign_in_with_provider

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'IdentityConflictError',
    # Services
    'authenticate_user',
    'sign_in_with_provider',
]
