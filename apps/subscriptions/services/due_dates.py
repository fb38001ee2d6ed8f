"""
Due-date classification service.

Classifies a subscription by how many calendar days remain until its next
charge. The caller always passes ``now``; nothing in this module reads the
clock, so results are deterministic and testable without time mocking.

Status buckets::

    days_until_due < 0        -> overdue
    days_until_due == 0       -> dueToday
    1 <= days_until_due <= 7  -> dueSoon
    days_until_due > 7        -> active
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from django.db import models
from django.utils import timezone

from .records import field_value


DUE_SOON_WINDOW_DAYS = 7


class DueStatus(models.TextChoices):
    OVERDUE = 'overdue', 'Overdue'
    DUE_TODAY = 'dueToday', 'Due Today'
    DUE_SOON = 'dueSoon', 'Due Soon'
    ACTIVE = 'active', 'Active'


@dataclass(frozen=True)
class DueDateClassification:
    status: str
    days_until_due: int

    @property
    def is_due_soon(self) -> bool:
        """True for dueToday and dueSoon (two-tier coloring)."""
        return self.status in (DueStatus.DUE_TODAY, DueStatus.DUE_SOON)


def to_local_date(value) -> date:
    """
    Truncate a date or datetime to a local calendar day.

    Aware datetimes are converted to the current time zone first, naive
    datetimes are truncated as they are.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def days_until(due_date, now) -> int:
    """Whole calendar days from ``now`` to ``due_date`` (negative if past)."""
    return (to_local_date(due_date) - to_local_date(now)).days


def classify(due_date, now) -> DueDateClassification:
    """
    Classify a due date relative to ``now``.

    Args:
        due_date: Next due date (date or datetime).
        now: Reference moment (date or datetime), usually
            ``timezone.localdate()`` in views.

    Returns:
        DueDateClassification with status and days_until_due.

    Example:
        >>> classify(date(2025, 3, 8), date(2025, 3, 1))
        DueDateClassification(status='dueSoon', days_until_due=7)
    """
    days = days_until(due_date, now)

    if days < 0:
        status = DueStatus.OVERDUE
    elif days == 0:
        status = DueStatus.DUE_TODAY
    elif days <= DUE_SOON_WINDOW_DAYS:
        status = DueStatus.DUE_SOON
    else:
        status = DueStatus.ACTIVE

    return DueDateClassification(status=status.value, days_until_due=days)


def upcoming(subscriptions: Iterable, now, window_days: int = DUE_SOON_WINDOW_DAYS) -> list:
    """
    Return subscriptions due within the next ``window_days`` days.

    Includes items due today; overdue items are excluded. Results are
    ordered by due date, then name.
    """
    due = [
        sub for sub in subscriptions
        if 0 <= days_until(field_value(sub, 'next_due_date'), now) <= window_days
    ]
    due.sort(key=lambda sub: (
        to_local_date(field_value(sub, 'next_due_date')),
        field_value(sub, 'name'),
    ))
    return due


def group_by_due_date(subscriptions: Iterable, start: date, end: date) -> dict:
    """
    Map each day in [start, end] to the subscriptions due that day.

    Every day of the range is present, with an empty list when nothing is
    due. Used to render the month calendar.
    """
    calendar = {}
    day = start
    while day <= end:
        calendar[day] = []
        day += timedelta(days=1)

    for sub in subscriptions:
        due_day = to_local_date(field_value(sub, 'next_due_date'))
        if due_day in calendar:
            calendar[due_day].append(sub)

    return calendar
