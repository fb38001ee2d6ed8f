"""
Billing cycle migration service.

Early versions stored two-year and three-year cycles as '2yr' and '3yr'.
This module maps stored values onto the canonical set and writes back only
the records that change, in a single transaction.

Mapping::

    'monthly'   -> 'monthly'
    'yearly'    -> 'yearly'
    '2yr'       -> 'twoYear'
    '3yr'       -> 'threeYear'
    canonical   -> itself
    anything else -> 'monthly' (lossy; reported as unmapped)

The migration procedure does not apply the lossy default unless asked to:
unrecognized values are listed in the report for manual review.

Usage:
    python manage.py migrate_billing_cycles --dry-run
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from django.db import transaction
from django.utils import timezone

from apps.subscriptions.models import BillingCycle, Subscription
from .normalization import CANONICAL_CYCLES


logger = logging.getLogger(__name__)

LEGACY_CYCLES = {
    '2yr': BillingCycle.TWO_YEAR.value,
    '3yr': BillingCycle.THREE_YEAR.value,
}

FALLBACK_CYCLE = BillingCycle.MONTHLY.value


def resolve_cycle(raw) -> tuple[str, bool]:
    """
    Map a stored billing cycle to the canonical set.

    Returns:
        (cycle, mapped) where ``mapped`` is False when the value was not
        recognized and the monthly fallback was used.
    """
    if raw in CANONICAL_CYCLES:
        return raw, True
    if raw in LEGACY_CYCLES:
        return LEGACY_CYCLES[raw], True
    return FALLBACK_CYCLE, False


def normalize_cycle(raw) -> str:
    """
    Map any stored value to a canonical billing cycle. Never fails.

    Example:
        >>> normalize_cycle('2yr')
        'twoYear'
        >>> normalize_cycle(normalize_cycle('weekly'))
        'monthly'
    """
    return resolve_cycle(raw)[0]


@dataclass
class CycleMigrationReport:
    """Outcome of a billing cycle migration run."""

    scanned: int = 0
    updates: list = field(default_factory=list)  # [(id, old, new)]
    unmapped: list = field(default_factory=list)  # [(id, raw)]
    applied: bool = False
    written: int = 0

    @property
    def update_count(self) -> int:
        return len(self.updates)


def plan_cycle_migration(rows: Iterable, *, coerce_unmapped: bool = False) -> CycleMigrationReport:
    """
    Work out which records need a new billing cycle.

    Args:
        rows: (id, stored_billing_cycle) pairs.
        coerce_unmapped: Write the monthly fallback for unrecognized values
            instead of only reporting them.

    Returns:
        CycleMigrationReport with ``applied=False``.
    """
    report = CycleMigrationReport()

    for record_id, raw in rows:
        report.scanned += 1
        cycle, mapped = resolve_cycle(raw)

        if not mapped:
            report.unmapped.append((record_id, raw))
            if not coerce_unmapped:
                continue

        if cycle != raw:
            report.updates.append((record_id, raw, cycle))

    return report


def apply_cycle_updates(queryset, updates: list) -> int:
    """
    Write planned updates as one all-or-nothing batch.

    Records are grouped by (old, new) so each pair costs one UPDATE. A row
    is only written while it still holds the planned old value; a row
    edited since planning is left as it is.

    Returns:
        Number of rows written.
    """
    by_change = defaultdict(list)
    for record_id, old, new in updates:
        by_change[(old, new)].append(record_id)

    written = 0
    now = timezone.now()
    with transaction.atomic():
        # str() keys: an unmapped old value may be None
        for (old, new), ids in sorted(by_change.items(), key=lambda item: tuple(map(str, item[0]))):
            written += queryset.filter(pk__in=ids, billing_cycle=old).update(
                billing_cycle=new,
                updated_at=now,
            )
    return written


def migrate_billing_cycles(queryset=None, *, dry_run: bool = False, coerce_unmapped: bool = False) -> CycleMigrationReport:
    """
    Normalize every stored billing cycle.

    This operation, inside one transaction:
    1. Reads (id, billing_cycle) for every record in ``queryset``, locking
       the rows unless this is a dry run
    2. Plans updates for records whose value changes
    3. Applies them (skipped on dry run)

    Running it twice is safe: the second run plans zero updates.

    Args:
        queryset: Subscription queryset to migrate (defaults to all rows).
        dry_run: Plan only, write nothing.
        coerce_unmapped: Apply the lossy monthly fallback to unrecognized
            values.

    Returns:
        CycleMigrationReport. ``applied`` is True only when writes happened;
        ``written`` counts the rows actually changed.
    """
    if queryset is None:
        queryset = Subscription.objects.all()

    try:
        with transaction.atomic():
            rows = queryset.order_by()
            if not dry_run:
                rows = rows.select_for_update()
            report = plan_cycle_migration(
                rows.values_list('pk', 'billing_cycle'),
                coerce_unmapped=coerce_unmapped,
            )
            _log_plan(report, coerce_unmapped)

            if dry_run or not report.updates:
                return report

            report.written = apply_cycle_updates(queryset, report.updates)
    except Exception:
        logger.exception("Billing cycle migration failed; batch rolled back")
        raise

    report.applied = True
    if report.written != report.update_count:
        logger.warning(
            "%d subscription(s) changed during migration and were left as edited",
            report.update_count - report.written,
        )
    logger.info("Billing cycle migration applied: %d record(s) updated", report.written)
    return report


def _log_plan(report, coerce_unmapped):
    for record_id, raw in report.unmapped:
        logger.warning(
            "Unrecognized billing cycle %r on subscription %s%s",
            raw, record_id,
            " (coerced to monthly)" if coerce_unmapped else " (left for review)",
        )

    logger.info(
        "Billing cycle migration planned: scanned=%d updates=%d unmapped=%d",
        report.scanned, report.update_count, len(report.unmapped),
    )
