from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


MAX_AMOUNT = Decimal('999999')


class BillingCycle(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    YEARLY = 'yearly', 'Yearly'
    TWO_YEAR = 'twoYear', '2 Years'
    THREE_YEAR = 'threeYear', '3 Years'


class Frequency(models.TextChoices):
    RECURRING = 'recurring', 'Recurring'
    ONE_TIME = 'oneTime', 'One Time'


# Offered in the UI, never enforced on the model
SUGGESTED_CATEGORIES = [
    # Entertainment & Media
    'Streaming',
    'Gaming',
    'Music',
    'News',
    'Entertainment',
    # Software & Technology
    'Software',
    'Productivity',
    'Cloud Services',
    'Security',
    # Health & Fitness
    'Fitness',
    'Health',
    'Wellness',
    # Education & Learning
    'Education',
    'Learning',
    'Professional Development',
    # Finance & Bills
    'Mortgage',
    'Rent',
    'Utilities',
    'Insurance',
    'Loan',
    'Credit Card',
    'Investment',
    'Tax',
    # Transportation
    'Transportation',
    'Fuel',
    'Parking',
    'Public Transit',
    # Shopping & Retail
    'Shopping',
    'Retail',
    'Membership',
    # Other
    'Other',
]


class Subscription(models.Model):
    """A recurring subscription or one-time bill owned by a single user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='subscriptions'
    )

    name = models.CharField(max_length=100)
    category = models.CharField(max_length=50)

    # Financial details
    amount = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal('0.01')),
            MaxValueValidator(MAX_AMOUNT),
        ]
    )
    # Not constrained at the database level: legacy rows may still hold
    # '2yr'/'3yr' until migrate_billing_cycles has run.
    billing_cycle = models.CharField(
        max_length=16,
        choices=BillingCycle.choices,
        default=BillingCycle.MONTHLY
    )
    frequency = models.CharField(
        max_length=16,
        choices=Frequency.choices,
        default=Frequency.RECURRING
    )

    next_due_date = models.DateField()
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'
        indexes = [
            models.Index(fields=['user', 'next_due_date'], name='subs_user_due_idx'),
            models.Index(fields=['user', 'category'], name='subs_user_category_idx'),
            models.Index(fields=['billing_cycle'], name='subs_billing_cycle_idx'),
        ]
        ordering = ['next_due_date', 'name']

    def __str__(self):
        return f"{self.name} - {self.amount} ({self.billing_cycle}, {self.frequency})"