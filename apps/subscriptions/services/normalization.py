"""
Money normalization - billing cycle to monthly/yearly equivalents.

Subscriptions are billed on different cycles. To sum them comparably each
amount is converted to what it costs per month and per year:

    ============  ==================  =================
    cycle         monthly equivalent  yearly equivalent
    ============  ==================  =================
    monthly       amount              amount * 12
    yearly        amount / 12         amount
    twoYear       amount / 24         amount / 2
    threeYear     amount / 36         amount / 3
    ============  ==================  =================

No rounding happens here; serializers round for display.
"""

from decimal import Decimal
from typing import Union

from apps.subscriptions.models import BillingCycle
from .exceptions import InvalidBillingCycleError


Number = Union[Decimal, int, float, str]

# Number of months covered by a single charge
CYCLE_MONTHS = {
    BillingCycle.MONTHLY.value: 1,
    BillingCycle.YEARLY.value: 12,
    BillingCycle.TWO_YEAR.value: 24,
    BillingCycle.THREE_YEAR.value: 36,
}

CANONICAL_CYCLES = frozenset(CYCLE_MONTHS)


def as_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through str() for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def cycle_months(billing_cycle: str) -> int:
    """
    Return how many months one charge of the given cycle covers.

    Raises:
        InvalidBillingCycleError: If billing_cycle is not canonical.
    """
    try:
        return CYCLE_MONTHS[billing_cycle]
    except (KeyError, TypeError):
        raise InvalidBillingCycleError(billing_cycle) from None


def monthly_equivalent(amount: Number, billing_cycle: str) -> Decimal:
    """
    Return the monthly cost of a charge billed every billing_cycle.

    Example:
        >>> monthly_equivalent(Decimal('120.00'), 'yearly')
        Decimal('10')
    """
    months = cycle_months(billing_cycle)
    return as_decimal(amount) / months


def yearly_equivalent(amount: Number, billing_cycle: str) -> Decimal:
    """
    Return the yearly cost of a charge billed every billing_cycle.

    Example:
        >>> yearly_equivalent(Decimal('15.99'), 'monthly')
        Decimal('191.88')
    """
    months = cycle_months(billing_cycle)
    amount = as_decimal(amount)
    if months <= 12:
        return amount * (12 // months)
    return amount / (months // 12)
