"""
Domain exceptions for subscriptions app.

Exception Hierarchy:
    SubscriptionsServiceError (base)
    ├── InvalidBillingCycleError
    └── SubscriptionNotFoundError

    SubscriptionAccessDeniedError (APIException, 404)

Usage:
    from apps.subscriptions.services.exceptions import InvalidBillingCycleError

    try:
        monthly = monthly_equivalent(sub.amount, sub.billing_cycle)
    except InvalidBillingCycleError as e:
        return Response({'error': str(e)}, status=409)
"""
from rest_framework.exceptions import APIException


class SubscriptionsServiceError(Exception):
    """Base exception for subscriptions service errors."""
    pass


class InvalidBillingCycleError(SubscriptionsServiceError):
    """
    Raised when a billing cycle is outside the canonical set.

    Only 'monthly', 'yearly', 'twoYear' and 'threeYear' are accepted by the
    money normalizer. Legacy values ('2yr', '3yr') must be converted with
    the migration normalizer first; they are never coerced here.
    """

    def __init__(self, billing_cycle):
        self.billing_cycle = billing_cycle
        super().__init__(
            f"Invalid billing cycle: {billing_cycle!r}. "
            f"Run 'manage.py migrate_billing_cycles' to normalize legacy values."
        )


class SubscriptionNotFoundError(SubscriptionsServiceError):
    """Subscription does not exist or belongs to another user."""
    pass


class SubscriptionAccessDeniedError(APIException):
    """Subscription belongs to another user (reported as not found)."""
    status_code = 404
    default_detail = 'Subscription not found.'
    default_code = 'subscription_not_found'
