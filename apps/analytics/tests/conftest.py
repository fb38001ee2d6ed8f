import pytest
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.subscriptions.models import Subscription, BillingCycle, Frequency


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def analytics_user(db):
    """Create the main analytics test user."""
    return User.objects.create_user(
        email='analytics_user@example.com',
        password='TestPass123!',
        display_name='Analytics User',
    )


@pytest.fixture
def analytics_outsider(db):
    """Create a user whose subscriptions must never show up."""
    return User.objects.create_user(
        email='analytics_outsider@example.com',
        password='TestPass123!',
        display_name='Analytics Outsider',
    )


@pytest.fixture
def analytics_client(api_client, analytics_user):
    """Return API client authenticated as analytics_user."""
    refresh = RefreshToken.for_user(analytics_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Subscriptions
# =============================================================================

@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def add_subscription(analytics_user, today):
    """Factory for subscriptions; ``due_in`` is days from today."""
    def factory(name, amount, category='Streaming', billing_cycle=BillingCycle.MONTHLY,
                frequency=Frequency.RECURRING, due_in=10, user=None):
        return Subscription.objects.create(
            user=user or analytics_user,
            name=name,
            amount=Decimal(amount),
            category=category,
            billing_cycle=billing_cycle,
            frequency=frequency,
            next_due_date=today + timedelta(days=due_in),
        )
    return factory


@pytest.fixture
def spend_data(add_subscription, analytics_outsider):
    """
    Netflix  15.99   monthly  recurring  Streaming  due in 2 days
    Adobe    120.00  yearly   recurring  Software   due in 20 days
    Course   9.99    monthly  oneTime    Education  due today

    Plus one subscription owned by the outsider.
    """
    return [
        add_subscription('Netflix', '15.99', due_in=2),
        add_subscription('Adobe', '120.00', category='Software',
                         billing_cycle=BillingCycle.YEARLY, due_in=20),
        add_subscription('Course', '9.99', category='Education',
                         frequency=Frequency.ONE_TIME, due_in=0),
        add_subscription('Outsider', '500.00', due_in=1, user=analytics_outsider),
    ]
