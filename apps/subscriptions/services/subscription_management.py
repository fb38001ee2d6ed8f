"""Subscription management service - owner-scoped CRUD operations."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.subscriptions.models import Subscription, SUGGESTED_CATEGORIES
from .exceptions import SubscriptionNotFoundError
from .filtering import FilterCriteria, apply_to_queryset


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'name',
    'amount',
    'category',
    'billing_cycle',
    'frequency',
    'next_due_date',
    'notes',
)

# Merged into every user's category list
COMMON_CATEGORIES = [
    'Streaming',
    'Software',
    'Utilities',
    'Health',
    'Education',
    'Gaming',
    'Music',
    'Cloud Storage',
    'Internet',
    'Phone',
    'Insurance',
    'Gym',
    'Food Delivery',
    'Shopping',
    'Transportation',
]


def get_user_subscriptions(
    *,
    user: User,
    criteria: Optional[FilterCriteria] = None
) -> QuerySet:
    """
    Return the user's subscriptions, ordered by next due date.

    Args:
        user: Owner of the subscriptions
        criteria: Optional filter criteria applied in the database

    Returns:
        QuerySet of Subscription
    """
    queryset = Subscription.objects.filter(user=user).order_by('next_due_date', 'name')
    if criteria is not None:
        queryset = apply_to_queryset(queryset, criteria)
    return queryset


def get_subscription_by_id(*, user: User, subscription_id: UUID) -> Subscription:
    """
    Fetch one of the user's subscriptions.

    Raises:
        SubscriptionNotFoundError: If it doesn't exist or belongs to
            someone else (the two cases are indistinguishable on purpose).
    """
    try:
        return Subscription.objects.get(id=subscription_id, user=user)
    except Subscription.DoesNotExist:
        raise SubscriptionNotFoundError("Subscription not found")


@transaction.atomic
def create_subscription(
    *,
    user: User,
    name: str,
    amount: Decimal,
    category: str,
    billing_cycle: str,
    frequency: str,
    next_due_date: date,
    notes: str = ''
) -> Subscription:
    """
    Create a subscription owned by ``user``.

    Input is expected to be validated by SubscriptionSerializer.

    Returns:
        Created Subscription instance
    """
    subscription = Subscription.objects.create(
        user=user,
        name=name,
        amount=amount,
        category=category,
        billing_cycle=billing_cycle,
        frequency=frequency,
        next_due_date=next_due_date,
        notes=notes or '',
    )
    logger.info("Subscription %s created for user %s", subscription.id, user.id)
    return subscription


@transaction.atomic
def update_subscription(*, subscription: Subscription, **changes) -> Subscription:
    """
    Apply field changes to a subscription.

    Unknown field names are ignored so callers can pass serializer
    ``validated_data`` straight through.
    """
    update_fields = []
    for field_name in UPDATABLE_FIELDS:
        if field_name in changes:
            value = changes[field_name]
            if field_name == 'notes' and value is None:
                value = ''
            setattr(subscription, field_name, value)
            update_fields.append(field_name)

    if update_fields:
        subscription.save(update_fields=update_fields + ['updated_at'])
        logger.info(
            "Subscription %s updated (%s)",
            subscription.id, ', '.join(update_fields),
        )
    return subscription


@transaction.atomic
def delete_subscription(*, subscription: Subscription) -> None:
    """Delete a subscription."""
    subscription_id = subscription.id
    subscription.delete()
    logger.info("Subscription %s deleted", subscription_id)


def get_user_categories(*, user: User) -> list[str]:
    """
    List categories for the category picker.

    The user's own categories merged with a list of common ones,
    de-duplicated and sorted alphabetically.
    """
    own = (
        Subscription.objects.filter(user=user)
        .order_by()
        .values_list('category', flat=True)
        .distinct()
    )
    return sorted(set(own) | set(COMMON_CATEGORIES))


def get_suggested_categories() -> list[str]:
    """Full suggested category list, in display order."""
    return list(SUGGESTED_CATEGORIES)
