"""
Subscription filter criteria.

A single declarative ``FilterCriteria`` value describes which subscriptions
to keep. It is compiled independently into:

- a Django ``Q`` object (``build_query``) for server-side filtering, and
- a plain predicate (``build_predicate``) for filtering a list in memory.

Both forms follow the same rules, so they select the same records:

- an empty set of categories / billing cycles / frequencies matches all
- a non-empty set requires exact, case-sensitive membership
- ``min_amount`` / ``max_amount`` are inclusive bounds
- ``min_amount > max_amount`` matches nothing
- all active criteria combine with AND
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from django.db.models import Q, QuerySet

from .normalization import as_decimal
from .records import field_value


@dataclass(frozen=True)
class FilterCriteria:
    categories: frozenset = field(default_factory=frozenset)
    billing_cycles: frozenset = field(default_factory=frozenset)
    frequencies: frozenset = field(default_factory=frozenset)
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    def __post_init__(self):
        # Accept any iterable (lists from serializers) but store frozensets
        for name in ('categories', 'billing_cycles', 'frequencies'):
            value = getattr(self, name)
            if value is None:
                value = frozenset()
            object.__setattr__(self, name, frozenset(value))
        for name in ('min_amount', 'max_amount'):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, as_decimal(value))

    @property
    def is_empty(self) -> bool:
        return not (
            self.categories or self.billing_cycles or self.frequencies
            or self.min_amount is not None or self.max_amount is not None
        )

    @property
    def is_empty_range(self) -> bool:
        return (
            self.min_amount is not None
            and self.max_amount is not None
            and self.min_amount > self.max_amount
        )


def build_predicate(criteria: FilterCriteria) -> Callable[[object], bool]:
    """
    Compile criteria into an in-memory predicate.

    Example:
        >>> keep = build_predicate(FilterCriteria(categories={'Streaming'}))
        >>> [s.name for s in subscriptions if keep(s)]
        ['Netflix']
    """
    def predicate(sub) -> bool:
        if criteria.categories and field_value(sub, 'category') not in criteria.categories:
            return False
        if criteria.billing_cycles and field_value(sub, 'billing_cycle') not in criteria.billing_cycles:
            return False
        if criteria.frequencies and field_value(sub, 'frequency') not in criteria.frequencies:
            return False

        if criteria.min_amount is not None or criteria.max_amount is not None:
            amount = as_decimal(field_value(sub, 'amount'))
            if criteria.min_amount is not None and amount < criteria.min_amount:
                return False
            if criteria.max_amount is not None and amount > criteria.max_amount:
                return False

        return True

    return predicate


def build_query(criteria: FilterCriteria) -> Q:
    """
    Compile criteria into a Django Q object over Subscription fields.

    An empty range compiles to ``pk__in=[]`` so every backend returns no
    rows without relying on how it compares the two bounds.
    """
    if criteria.is_empty_range:
        return Q(pk__in=[])

    query = Q()
    if criteria.categories:
        query &= Q(category__in=sorted(criteria.categories))
    if criteria.billing_cycles:
        query &= Q(billing_cycle__in=sorted(criteria.billing_cycles))
    if criteria.frequencies:
        query &= Q(frequency__in=sorted(criteria.frequencies))
    if criteria.min_amount is not None:
        query &= Q(amount__gte=criteria.min_amount)
    if criteria.max_amount is not None:
        query &= Q(amount__lte=criteria.max_amount)
    return query


def apply_to_queryset(queryset: QuerySet, criteria: FilterCriteria) -> QuerySet:
    """Filter a Subscription queryset with the given criteria."""
    if criteria.is_empty:
        return queryset
    return queryset.filter(build_query(criteria))


def filter_in_memory(subscriptions: Iterable, criteria: FilterCriteria) -> list:
    """Filter an already-loaded collection with the given criteria."""
    predicate = build_predicate(criteria)
    return [sub for sub in subscriptions if predicate(sub)]
