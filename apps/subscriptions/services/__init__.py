"""
Subscriptions services - Business logic layer.

This package contains all business operations for the subscriptions app:
- Money normalization (billing cycle to monthly/yearly)
- Spend aggregation and category breakdown
- Due-date classification
- Filter criteria (database and in-memory)
- Legacy billing cycle migration
- Subscription CRUD operations
"""

# Money normalization
from .normalization import (
    CYCLE_MONTHS,
    CANONICAL_CYCLES,
    as_decimal,
    cycle_months,
    monthly_equivalent,
    yearly_equivalent,
)

# Aggregation
from .aggregation import (
    SpendSummary,
    CategorySpend,
    aggregate,
    category_breakdown,
)

# Due dates
from .due_dates import (
    DUE_SOON_WINDOW_DAYS,
    DueStatus,
    DueDateClassification,
    classify,
    days_until,
    upcoming,
    group_by_due_date,
)

# Filtering
from .filtering import (
    FilterCriteria,
    build_predicate,
    build_query,
    apply_to_queryset,
    filter_in_memory,
)

# Billing cycle migration
from .cycle_migration import (
    LEGACY_CYCLES,
    CycleMigrationReport,
    resolve_cycle,
    normalize_cycle,
    plan_cycle_migration,
    apply_cycle_updates,
    migrate_billing_cycles,
)

# Subscription management
from .subscription_management import (
    get_user_subscriptions,
    get_subscription_by_id,
    create_subscription,
    update_subscription,
    delete_subscription,
    get_user_categories,
    get_suggested_categories,
)

# Domain Exceptions
from .exceptions import (
    SubscriptionsServiceError,
    InvalidBillingCycleError,
    SubscriptionNotFoundError,
    SubscriptionAccessDeniedError,
)

__all__ = [
    # Normalization
    'CYCLE_MONTHS',
    'CANONICAL_CYCLES',
    'as_decimal',
    'cycle_months',
    'monthly_equivalent',
    'yearly_equivalent',
    # Aggregation
    'SpendSummary',
    'CategorySpend',
    'aggregate',
    'category_breakdown',
    # Due dates
    'DUE_SOON_WINDOW_DAYS',
    'DueStatus',
    'DueDateClassification',
    'classify',
    'days_until',
    'upcoming',
    'group_by_due_date',
    # Filtering
    'FilterCriteria',
    'build_predicate',
    'build_query',
    'apply_to_queryset',
    'filter_in_memory',
    # Migration
    'LEGACY_CYCLES',
    'CycleMigrationReport',
    'resolve_cycle',
    'normalize_cycle',
    'plan_cycle_migration',
    'apply_cycle_updates',
    'migrate_billing_cycles',
    # Subscription Management
    'get_user_subscriptions',
    'get_subscription_by_id',
    'create_subscription',
    'update_subscription',
    'delete_subscription',
    'get_user_categories',
    'get_suggested_categories',
    # Exceptions
    'SubscriptionsServiceError',
    'InvalidBillingCycleError',
    'SubscriptionNotFoundError',
    'SubscriptionAccessDeniedError',
]
