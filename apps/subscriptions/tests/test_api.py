import pytest
import uuid
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.subscriptions.models import Subscription


# =============================================================================
# List
# =============================================================================

@pytest.mark.django_db
class TestSubscriptionList:
    """Tests for GET /api/subscriptions/"""

    def test_list_requires_auth(self, api_client):
        url = reverse('subscriptions:subscription-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_own_subscriptions(self, subscriber_client, sample_subscriptions, make_subscription, other_subscriber):
        """Only the caller's subscriptions are listed, soonest due first."""
        make_subscription(name='Hidden', user=other_subscriber)

        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 5
        names = [s['name'] for s in response.data['results']]
        assert names == ['Antivirus', 'Course', 'Adobe', 'Netflix', 'Domain']

    def test_list_includes_derived_fields(self, subscriber_client, sample_subscriptions):
        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.get(url)

        by_name = {s['name']: s for s in response.data['results']}
        assert by_name['Antivirus']['status'] == 'overdue'
        assert by_name['Antivirus']['days_until_due'] == -5
        assert by_name['Course']['status'] == 'dueToday'
        assert by_name['Adobe']['status'] == 'dueSoon'
        assert by_name['Netflix']['status'] == 'active'
        assert by_name['Adobe']['monthly_equivalent'] == '10.00'
        assert by_name['Course']['monthly_equivalent'] == '0.00'

    def test_list_pagination(self, subscriber_client, make_subscription):
        for i in range(55):
            make_subscription(name=f'Sub {i:02d}')

        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.get(url)

        assert response.data['count'] == 55
        assert len(response.data['results']) == 50
        assert response.data['next'] is not None


@pytest.mark.django_db
class TestSubscriptionFilters:
    """Tests for filter query parameters."""

    def names(self, client, params):
        url = reverse('subscriptions:subscription-list')
        response = client.get(url, params)
        assert response.status_code == status.HTTP_200_OK, response.data
        return [s['name'] for s in response.data['results']]

    def test_filter_by_categories(self, subscriber_client, sample_subscriptions):
        assert self.names(subscriber_client, {'categories': 'Streaming,Security'}) == ['Antivirus', 'Netflix']

    def test_category_filter_is_case_sensitive(self, subscriber_client, sample_subscriptions):
        assert self.names(subscriber_client, {'categories': 'streaming'}) == []

    def test_filter_by_billing_cycles(self, subscriber_client, sample_subscriptions):
        assert self.names(subscriber_client, {'billing_cycles': 'twoYear,threeYear'}) == ['Antivirus', 'Domain']

    def test_filter_by_frequency(self, subscriber_client, sample_subscriptions):
        assert self.names(subscriber_client, {'frequencies': 'oneTime'}) == ['Course']

    def test_filter_by_amount_range(self, subscriber_client, sample_subscriptions):
        names = self.names(subscriber_client, {'min_amount': '15.99', 'max_amount': '90'})
        assert names == ['Antivirus', 'Netflix', 'Domain']

    def test_inverted_range_returns_nothing(self, subscriber_client, sample_subscriptions):
        assert self.names(subscriber_client, {'min_amount': '100', 'max_amount': '10'}) == []

    def test_invalid_billing_cycle_rejected(self, subscriber_client, sample_subscriptions):
        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.get(url, {'billing_cycles': '2yr'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'billing_cycles' in response.data

    def test_invalid_amount_rejected(self, subscriber_client):
        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.get(url, {'min_amount': 'lots'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestSubscriptionCreate:
    """Tests for POST /api/subscriptions/"""

    PAYLOAD = {
        'name': 'Spotify',
        'amount': '10.99',
        'category': 'Music',
        'billing_cycle': 'monthly',
        'frequency': 'recurring',
        'next_due_date': '2030-01-15',
    }

    def test_create_subscription(self, subscriber_client, subscriber):
        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.post(url, self.PAYLOAD, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Spotify'
        assert response.data['monthly_equivalent'] == '10.99'
        assert response.data['yearly_equivalent'] == '131.88'

        sub = Subscription.objects.get(id=response.data['id'])
        assert sub.user == subscriber
        assert sub.amount == Decimal('10.99')

    def test_create_yearly(self, subscriber_client):
        url = reverse('subscriptions:subscription-list')
        payload = {**self.PAYLOAD, 'amount': '120.00', 'billing_cycle': 'yearly'}
        response = subscriber_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['monthly_equivalent'] == '10.00'

    def test_user_cannot_be_assigned(self, subscriber_client, subscriber, other_subscriber):
        url = reverse('subscriptions:subscription-list')
        payload = {**self.PAYLOAD, 'user': str(other_subscriber.id)}
        response = subscriber_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Subscription.objects.get(id=response.data['id']).user == subscriber

    @pytest.mark.parametrize('field,value', [
        ('billing_cycle', '2yr'),
        ('amount', '0'),
        ('name', 'x' * 101),
        ('frequency', 'weekly'),
    ])
    def test_create_invalid(self, subscriber_client, field, value):
        url = reverse('subscriptions:subscription-list')
        response = subscriber_client.post(url, {**self.PAYLOAD, field: value}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data
        assert not Subscription.objects.exists()

    def test_create_requires_auth(self, api_client):
        url = reverse('subscriptions:subscription-list')
        response = api_client.post(url, self.PAYLOAD, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Retrieve / Update / Delete
# =============================================================================

@pytest.mark.django_db
class TestSubscriptionDetail:
    """Tests for /api/subscriptions/{id}/"""

    def test_retrieve(self, subscriber_client, make_subscription):
        sub = make_subscription()
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = subscriber_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(sub.id)

    def test_retrieve_other_users_subscription_not_found(self, other_client, make_subscription):
        sub = make_subscription()
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_missing(self, subscriber_client):
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': uuid.uuid4()})
        response = subscriber_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_partial_update(self, subscriber_client, make_subscription):
        sub = make_subscription(amount='15.99')
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = subscriber_client.patch(url, {'amount': '17.99', 'notes': 'price rise'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['amount'] == '17.99'
        sub.refresh_from_db()
        assert sub.amount == Decimal('17.99')
        assert sub.notes == 'price rise'

    def test_partial_update_rejects_legacy_cycle(self, subscriber_client, make_subscription):
        sub = make_subscription()
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = subscriber_client.patch(url, {'billing_cycle': '3yr'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_other_users_subscription(self, other_client, make_subscription):
        sub = make_subscription(amount='15.99')
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = other_client.patch(url, {'amount': '1.00'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        sub.refresh_from_db()
        assert sub.amount == Decimal('15.99')

    def test_delete(self, subscriber_client, make_subscription):
        sub = make_subscription()
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = subscriber_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Subscription.objects.filter(id=sub.id).exists()

    def test_delete_other_users_subscription(self, other_client, make_subscription):
        sub = make_subscription()
        url = reverse('subscriptions:subscription-detail', kwargs={'pk': sub.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Subscription.objects.filter(id=sub.id).exists()


# =============================================================================
# Categories
# =============================================================================

@pytest.mark.django_db
class TestSubscriptionCategories:
    """Tests for GET /api/subscriptions/categories/"""

    def test_categories(self, subscriber_client, make_subscription):
        make_subscription(category='Pets')

        url = reverse('subscriptions:subscription-categories')
        response = subscriber_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert 'Pets' in response.data['categories']
        assert 'Streaming' in response.data['categories']
        assert 'Pets' not in response.data['suggested']
        assert response.data['suggested'][0] == 'Streaming'
