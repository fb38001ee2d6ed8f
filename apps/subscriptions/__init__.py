"""
Subscriptions App - Subscription & Bill Tracking

This app manages a user's recurring subscriptions and one-time bills, and
hosts the engine that turns them into comparable spend figures.

Key Features:
- Owner-scoped CRUD for subscription records
- Monthly/yearly normalization across billing cycles
- Spend aggregation (monthly, yearly, one-time, average)
- Due-date classification (overdue / due today / due soon / active)
- Filter criteria usable both as ORM query and in-memory predicate
- Legacy billing-cycle migration ('2yr'/'3yr' -> 'twoYear'/'threeYear')

Architecture:
- Models: Subscription, BillingCycle, Frequency
- Services: normalization, aggregation, due_dates, filtering,
  cycle_migration, subscription_management
- Views: SubscriptionViewSet (owner-scoped ModelViewSet), categories
- Commands: migrate_billing_cycles, create_sample_data
"""

__version__ = '1.0.0'
