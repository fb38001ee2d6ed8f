"""
Spend aggregation service.

Sums normalized amounts across a snapshot of subscriptions to produce the
figures shown on the dashboard stat cards and the category pie chart.
"""

from collections.abc import Iterable
from dataclasses import dataclass, asdict
from decimal import Decimal

from apps.subscriptions.models import Frequency
from .normalization import as_decimal, monthly_equivalent, yearly_equivalent
from .records import field_value


ZERO = Decimal('0')


@dataclass(frozen=True)
class SpendSummary:
    """Aggregate spend over a collection of subscriptions."""

    total_monthly: Decimal
    total_yearly: Decimal
    total_one_time: Decimal
    count: int
    average_amount: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategorySpend:
    """Recurring spend for one category."""

    category: str
    monthly_total: Decimal
    yearly_total: Decimal
    count: int
    percentage: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def aggregate(subscriptions: Iterable) -> SpendSummary:
    """
    Calculate total monthly, yearly and one-time spend.

    This operation:
    1. Partitions subscriptions by frequency
    2. Sums monthly/yearly equivalents of recurring items
    3. Sums raw amounts of one-time items separately
    4. Averages raw amounts over all items (recurring and one-time)

    Args:
        subscriptions: Subscription instances or mappings with ``amount``,
            ``billing_cycle`` and ``frequency``.

    Returns:
        SpendSummary. All totals are zero for an empty collection.

    Raises:
        InvalidBillingCycleError: If a recurring item has a non-canonical
            billing cycle.

    Example:
        >>> summary = aggregate(user.subscriptions.all())
        >>> summary.total_monthly
        Decimal('25.99')
    """
    total_monthly = ZERO
    total_yearly = ZERO
    total_one_time = ZERO
    total_amount = ZERO
    count = 0

    for sub in subscriptions:
        amount = as_decimal(field_value(sub, 'amount'))
        total_amount += amount
        count += 1

        if field_value(sub, 'frequency') == Frequency.ONE_TIME:
            total_one_time += amount
            continue

        cycle = field_value(sub, 'billing_cycle')
        total_monthly += monthly_equivalent(amount, cycle)
        total_yearly += yearly_equivalent(amount, cycle)

    average_amount = total_amount / count if count else ZERO

    return SpendSummary(
        total_monthly=total_monthly,
        total_yearly=total_yearly,
        total_one_time=total_one_time,
        count=count,
        average_amount=average_amount,
    )


def category_breakdown(subscriptions: Iterable) -> list[CategorySpend]:
    """
    Group recurring spend by category for the pie chart.

    One-time items are left out, so the monthly totals add up to
    ``aggregate(subscriptions).total_monthly``. Categories are sorted by
    monthly spend (highest first), then by name.
    """
    totals = {}

    for sub in subscriptions:
        if field_value(sub, 'frequency') == Frequency.ONE_TIME:
            continue

        category = field_value(sub, 'category')
        amount = field_value(sub, 'amount')
        cycle = field_value(sub, 'billing_cycle')

        monthly, yearly, count = totals.get(category, (ZERO, ZERO, 0))
        totals[category] = (
            monthly + monthly_equivalent(amount, cycle),
            yearly + yearly_equivalent(amount, cycle),
            count + 1,
        )

    grand_monthly = sum((monthly for monthly, _, _ in totals.values()), ZERO)

    breakdown = [
        CategorySpend(
            category=category,
            monthly_total=monthly,
            yearly_total=yearly,
            count=count,
            percentage=(monthly / grand_monthly * 100) if grand_monthly else ZERO,
        )
        for category, (monthly, yearly, count) in totals.items()
    ]
    breakdown.sort(key=lambda item: (-item.monthly_total, item.category))
    return breakdown
