"""
Analytics Module
=================

This module loads a user's subscriptions and runs them through the
subscription engine to power the dashboard: stat cards, the category pie
chart, the upcoming bills list and the due-date calendar.

Classes:
    SpendAnalytics: Static methods for the dashboard queries.

Key Features:
    - Monthly, yearly and one-time spend totals
    - Spend per category (recurring items only)
    - Bills due within the next N days
    - Subscriptions grouped by due date for a calendar month

Example:
    Getting the dashboard figures::

        from apps.analytics.analytics import SpendAnalytics

        today = timezone.localdate()
        summary = SpendAnalytics.summary(user, today=today)
        print(f"You spend {summary['total_monthly']} per month")

Note:
    This module is read-only and doesn't modify any data. All methods
    are static and can be called without instantiation. Each method loads
    the user's subscriptions once and computes in memory, so the totals
    and the per-record figures come from the same snapshot.
"""

import calendar
from datetime import date

from apps.subscriptions.services import (
    DUE_SOON_WINDOW_DAYS,
    aggregate,
    category_breakdown,
    get_user_subscriptions,
    group_by_due_date,
    upcoming,
)
from .exceptions import InvalidPeriodError


def parse_period(period: str) -> tuple[date, date]:
    """
    Convert a 'YYYY-MM' period into the first and last day of that month.

    Raises:
        InvalidPeriodError: If the period is not a valid month.

    Example:
        >>> parse_period('2024-02')
        (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    try:
        year, month = (int(part) for part in period.split('-'))
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last_day)
    except (ValueError, AttributeError, TypeError, calendar.IllegalMonthError):
        raise InvalidPeriodError("Invalid period format. Use YYYY-MM")


class SpendAnalytics:
    """
    Dashboard queries over one user's subscriptions.

    Methods:
        summary: Spend totals plus the number of bills due soon.
        categories: Recurring spend per category for the pie chart.
        upcoming: Subscriptions due within a window of days.
        calendar: Subscriptions grouped by due date for a month.
        dashboard: summary, categories and upcoming in one call.

    Raises:
        InvalidBillingCycleError: From any method that normalizes money, if
            a stored record still holds a legacy billing cycle.
    """

    @staticmethod
    def _load(user, criteria=None):
        return list(get_user_subscriptions(user=user, criteria=criteria))

    @staticmethod
    def summary(user, today, criteria=None, subscriptions=None):
        """
        Calculate the stat card figures.

        Args:
            user (User): Owner of the subscriptions.
            today (date): Reference day for the upcoming count.
            criteria (FilterCriteria, optional): Restrict to matching
                subscriptions, as in the list endpoint.
            subscriptions (list, optional): Already-loaded snapshot; skips
                the query when given.

        Returns:
            dict: A dictionary containing:
                - total_monthly (Decimal): Recurring spend per month.
                - total_yearly (Decimal): Recurring spend per year.
                - total_one_time (Decimal): Sum of one-time amounts.
                - count (int): Number of subscriptions.
                - average_amount (Decimal): Mean raw amount.
                - upcoming_count (int): Due within the next 7 days.
        """
        if subscriptions is None:
            subscriptions = SpendAnalytics._load(user, criteria)

        data = aggregate(subscriptions).as_dict()
        data['upcoming_count'] = len(upcoming(subscriptions, today, DUE_SOON_WINDOW_DAYS))
        return data

    @staticmethod
    def categories(user, criteria=None, subscriptions=None):
        """
        Recurring spend per category, highest monthly spend first.

        Returns:
            list[dict]: One dict per category with category, monthly_total,
            yearly_total, count and percentage of total monthly spend.
        """
        if subscriptions is None:
            subscriptions = SpendAnalytics._load(user, criteria)

        return [item.as_dict() for item in category_breakdown(subscriptions)]

    @staticmethod
    def upcoming(user, today, days=DUE_SOON_WINDOW_DAYS, subscriptions=None):
        """
        Subscriptions due between today and ``days`` days from now.

        Overdue items are excluded. Ordered by due date, then name.

        Returns:
            list[Subscription]
        """
        if subscriptions is None:
            subscriptions = SpendAnalytics._load(user)

        return upcoming(subscriptions, today, days)

    @staticmethod
    def calendar(user, start, end):
        """
        Subscriptions due on each day of [start, end].

        Returns:
            list[dict]: ``{'date': date, 'subscriptions': [...]}`` for every
            day in the range, in date order.
        """
        subscriptions = get_user_subscriptions(user=user).filter(
            next_due_date__gte=start,
            next_due_date__lte=end,
        )
        grouped = group_by_due_date(subscriptions, start, end)
        return [
            {'date': day, 'subscriptions': subs}
            for day, subs in grouped.items()
        ]

    @staticmethod
    def dashboard(user, today):
        """
        Everything the dashboard needs, from one snapshot.

        Returns:
            dict: ``summary``, ``categories`` and ``upcoming`` as returned by
            the individual methods.
        """
        subscriptions = SpendAnalytics._load(user)
        return {
            'summary': SpendAnalytics.summary(user, today, subscriptions=subscriptions),
            'categories': SpendAnalytics.categories(user, subscriptions=subscriptions),
            'upcoming': SpendAnalytics.upcoming(user, today, subscriptions=subscriptions),
        }
