import pytest
from django.urls import reverse
from rest_framework import status
from decimal import Decimal
from apps.subscriptions.models import Subscription


# =============================================================================
# Summary
# =============================================================================

@pytest.mark.django_db
class TestSpendSummary:
    """Tests for GET /api/analytics/summary/"""

    def test_requires_auth(self, api_client):
        url = reverse('analytics:summary')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_summary(self, analytics_client, spend_data):
        url = reverse('analytics:summary')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_monthly'] == '25.99'
        assert response.data['total_yearly'] == '311.88'
        assert response.data['total_one_time'] == '9.99'
        assert response.data['count'] == 3
        assert response.data['average_amount'] == '48.66'
        assert response.data['upcoming_count'] == 2

    def test_summary_empty(self, analytics_client):
        url = reverse('analytics:summary')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_monthly'] == '0.00'
        assert response.data['count'] == 0

    def test_summary_filtered(self, analytics_client, spend_data):
        url = reverse('analytics:summary')
        response = analytics_client.get(url, {'frequencies': 'oneTime'})

        assert response.data['count'] == 1
        assert response.data['total_monthly'] == '0.00'
        assert response.data['total_one_time'] == '9.99'

    def test_summary_invalid_filter(self, analytics_client):
        url = reverse('analytics:summary')
        response = analytics_client.get(url, {'billing_cycles': 'weekly'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_summary_large_totals(self, analytics_client, analytics_user, today):
        """Totals beyond any single record's size still serialize."""
        Subscription.objects.bulk_create([
            Subscription(
                user=analytics_user,
                name=f'Big {i}',
                amount=Decimal('999999'),
                category='Rent',
                next_due_date=today,
            )
            for i in range(1000)
        ])

        response = analytics_client.get(reverse('analytics:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_monthly'] == '999999000.00'
        assert response.data['total_yearly'] == '11999988000.00'

        response = analytics_client.get(reverse('analytics:dashboard'))
        assert response.status_code == status.HTTP_200_OK

    def test_legacy_cycle_conflict(self, analytics_client, spend_data, add_subscription):
        add_subscription('Domain', '48.00', billing_cycle='2yr')

        url = reverse('analytics:summary')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'migrate_billing_cycles' in response.data['error']


# =============================================================================
# Categories
# =============================================================================

@pytest.mark.django_db
class TestCategorySpend:
    """Tests for GET /api/analytics/categories/"""

    def test_categories(self, analytics_client, spend_data):
        url = reverse('analytics:categories')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [c['category'] for c in response.data] == ['Streaming', 'Software']
        assert response.data[0]['monthly_total'] == '15.99'
        assert response.data[0]['percentage'] == '61.52'
        assert response.data[1]['yearly_total'] == '120.00'
        assert response.data[1]['percentage'] == '38.48'

    def test_legacy_cycle_conflict(self, analytics_client, add_subscription):
        add_subscription('Antivirus', '90.00', billing_cycle='3yr')

        url = reverse('analytics:categories')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_409_CONFLICT


# =============================================================================
# Upcoming
# =============================================================================

@pytest.mark.django_db
class TestUpcomingBills:
    """Tests for GET /api/analytics/upcoming/"""

    def test_default_window(self, analytics_client, spend_data):
        url = reverse('analytics:upcoming')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['days'] == 7
        assert response.data['count'] == 2
        assert [s['name'] for s in response.data['results']] == ['Course', 'Netflix']
        assert response.data['results'][0]['status'] == 'dueToday'

    def test_custom_window(self, analytics_client, spend_data):
        url = reverse('analytics:upcoming')
        response = analytics_client.get(url, {'days': 30})

        assert response.data['count'] == 3

    def test_overdue_excluded(self, analytics_client, add_subscription):
        add_subscription('Late', '5.00', due_in=-1)

        url = reverse('analytics:upcoming')
        response = analytics_client.get(url)

        assert response.data['count'] == 0

    def test_invalid_days(self, analytics_client):
        url = reverse('analytics:upcoming')
        response = analytics_client.get(url, {'days': 400})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_legacy_cycle_still_listed(self, analytics_client, add_subscription):
        add_subscription('Domain', '48.00', billing_cycle='2yr', due_in=1)

        url = reverse('analytics:upcoming')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['monthly_equivalent'] is None


# =============================================================================
# Calendar
# =============================================================================

@pytest.mark.django_db
class TestCalendar:
    """Tests for GET /api/analytics/calendar/"""

    def test_default_period_is_current_month(self, analytics_client, spend_data, today):
        url = reverse('analytics:calendar')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['period'] == today.strftime('%Y-%m')
        entry = next(d for d in response.data['days'] if d['date'] == today.isoformat())
        assert [s['name'] for s in entry['subscriptions']] == ['Course']

    def test_explicit_period(self, analytics_client):
        url = reverse('analytics:calendar')
        response = analytics_client.get(url, {'period': '2024-02'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['start_date'] == '2024-02-01'
        assert response.data['end_date'] == '2024-02-29'
        assert len(response.data['days']) == 29

    def test_excludes_other_users(self, analytics_client, spend_data, today):
        url = reverse('analytics:calendar')
        response = analytics_client.get(url)

        names = [s['name'] for d in response.data['days'] for s in d['subscriptions']]
        assert 'Outsider' not in names

    @pytest.mark.parametrize('period', ['2025-13', '2025-1', 'soon'])
    def test_invalid_period(self, analytics_client, period):
        url = reverse('analytics:calendar')
        response = analytics_client.get(url, {'period': period})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'period' in response.data


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.django_db
class TestDashboard:
    """Tests for GET /api/analytics/dashboard/"""

    def test_dashboard(self, analytics_client, spend_data):
        url = reverse('analytics:dashboard')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['summary']['total_monthly'] == '25.99'
        assert len(response.data['categories']) == 2
        assert [s['name'] for s in response.data['upcoming']] == ['Course', 'Netflix']

    def test_dashboard_legacy_conflict(self, analytics_client, add_subscription):
        add_subscription('Domain', '48.00', billing_cycle='2yr')

        url = reverse('analytics:dashboard')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_requires_auth(self, api_client):
        url = reverse('analytics:dashboard')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
