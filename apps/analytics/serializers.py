"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    PeriodQuerySerializer - Validates the calendar month
    UpcomingQuerySerializer - Validates the upcoming window

Response Serializers:
    SpendSummarySerializer - Stat card figures
    CategorySpendSerializer - Spend for one category
    UpcomingResponseSerializer - Bills due soon
    CalendarResponseSerializer - Subscriptions grouped by due date
    DashboardResponseSerializer - Dashboard summary
"""

from rest_framework import serializers

from apps.subscriptions.serializers import (
    MoneyField,
    SubscriptionSerializer,
)
from apps.subscriptions.services import DUE_SOON_WINDOW_DAYS
from .analytics import parse_period
from .exceptions import InvalidPeriodError


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate the calendar period query parameter.

    Used by: calendar_view

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2025-01').
            Defaults to the current month.

    Note:
        The validated data carries ``start_date`` and ``end_date`` for the
        full month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        help_text='Month period in YYYY-MM format'
    )

    def validate(self, attrs):
        """Parse period into date range."""
        period = attrs.get('period') or self.context['today'].strftime('%Y-%m')
        try:
            attrs['start_date'], attrs['end_date'] = parse_period(period)
        except InvalidPeriodError as e:
            raise serializers.ValidationError({'period': str(e)})
        attrs['period'] = period
        return attrs


class UpcomingQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for upcoming bills endpoint.

    Used by: upcoming_bills

    Query Parameters:
        days (int): Window size in days (0-365), default 7
    """

    days = serializers.IntegerField(
        min_value=0,
        max_value=365,
        required=False,
        default=DUE_SOON_WINDOW_DAYS,
        help_text='Number of days ahead to include (0-365)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class SpendSummarySerializer(serializers.Serializer):
    """Response serializer for spend totals."""
    total_monthly = MoneyField()
    total_yearly = MoneyField()
    total_one_time = MoneyField()
    count = serializers.IntegerField()
    average_amount = MoneyField()
    upcoming_count = serializers.IntegerField()


class CategorySpendSerializer(serializers.Serializer):
    """Response serializer for spend in one category."""
    category = serializers.CharField()
    monthly_total = MoneyField()
    yearly_total = MoneyField()
    count = serializers.IntegerField()
    percentage = MoneyField(max_digits=5)


class UpcomingResponseSerializer(serializers.Serializer):
    """Response serializer for upcoming bills."""
    days = serializers.IntegerField()
    count = serializers.IntegerField()
    results = SubscriptionSerializer(many=True)


class CalendarDaySerializer(serializers.Serializer):
    """Nested serializer for one calendar day."""
    date = serializers.DateField()
    subscriptions = SubscriptionSerializer(many=True)


class CalendarResponseSerializer(serializers.Serializer):
    """Response serializer for the due-date calendar."""
    period = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    days = CalendarDaySerializer(many=True)


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for dashboard summary."""
    summary = SpendSummarySerializer()
    categories = CategorySpendSerializer(many=True)
    upcoming = SubscriptionSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
