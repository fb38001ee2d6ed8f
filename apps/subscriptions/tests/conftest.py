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


@pytest.fixture
def subscriber(db):
    """Create and return a test user who tracks subscriptions."""
    return User.objects.create_user(
        email='subscriber@example.com',
        password='TestPass123!',
        display_name='Subscriber',
    )


@pytest.fixture
def other_subscriber(db):
    """Create and return a second user with their own subscriptions."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other Subscriber',
    )


@pytest.fixture
def subscriber_client(api_client, subscriber):
    """Return API client authenticated as subscriber."""
    refresh = RefreshToken.for_user(subscriber)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_subscriber):
    """Return API client authenticated as the other subscriber."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_subscriber)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def make_subscription(subscriber, today):
    """
    Factory for subscriptions owned by ``subscriber`` unless ``user`` is given.

    ``due_in`` is days from today. Saved without field validation, so legacy
    billing cycles can be stored.
    """
    def factory(
        name='Netflix',
        amount='15.99',
        category='Streaming',
        billing_cycle=BillingCycle.MONTHLY,
        frequency=Frequency.RECURRING,
        due_in=10,
        user=None,
        **extra
    ):
        return Subscription.objects.create(
            user=user or subscriber,
            name=name,
            amount=Decimal(amount),
            category=category,
            billing_cycle=billing_cycle,
            frequency=frequency,
            next_due_date=today + timedelta(days=due_in),
            **extra
        )
    return factory


@pytest.fixture
def sample_subscriptions(make_subscription):
    """
    Mixed set covering every cycle and frequency.

    Netflix   15.99   monthly    recurring  Streaming
    Adobe     120.00  yearly     recurring  Software
    Domain    48.00   twoYear    recurring  Software
    Antivirus 90.00   threeYear  recurring  Security
    Course    9.99    monthly    oneTime    Education
    """
    return [
        make_subscription(name='Netflix', amount='15.99', category='Streaming'),
        make_subscription(name='Adobe', amount='120.00', category='Software',
                          billing_cycle=BillingCycle.YEARLY, due_in=3),
        make_subscription(name='Domain', amount='48.00', category='Software',
                          billing_cycle=BillingCycle.TWO_YEAR, due_in=40),
        make_subscription(name='Antivirus', amount='90.00', category='Security',
                          billing_cycle=BillingCycle.THREE_YEAR, due_in=-5),
        make_subscription(name='Course', amount='9.99', category='Education',
                          frequency=Frequency.ONE_TIME, due_in=0),
    ]
