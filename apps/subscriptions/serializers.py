from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone
from rest_framework import serializers

from .models import Subscription, BillingCycle, Frequency, MAX_AMOUNT
from .services import (
    FilterCriteria,
    InvalidBillingCycleError,
    classify,
    monthly_equivalent,
    yearly_equivalent,
)


CENT = Decimal('0.01')


def format_money(value) -> str:
    """Round a Decimal to cents for display."""
    return str(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


class MoneyField(serializers.DecimalField):
    """
    Read-only money value rounded half-up to cents.

    Unbounded by default: aggregate totals grow with the number of records.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', None)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('rounding', ROUND_HALF_UP)
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)


# =============================================================================
# Input Serializers
# =============================================================================

class CommaSeparatedListField(serializers.Field):
    """
    Parse a comma-separated query parameter into a list of strings.

    ``?categories=Streaming,Music`` -> ``['Streaming', 'Music']``.
    Blank items are dropped. When ``choices`` is given, every item must be
    one of them.
    """

    default_error_messages = {
        'invalid': 'Expected a comma-separated list.',
        'invalid_choice': '"{input}" is not a valid choice.',
    }

    def __init__(self, choices=None, **kwargs):
        self.choices = set(choices) if choices is not None else None
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')

        items = [item.strip() for item in data.split(',')]
        items = [item for item in items if item]

        if self.choices is not None:
            for item in items:
                if item not in self.choices:
                    self.fail('invalid_choice', input=item)
        return items

    def to_representation(self, value):
        return ','.join(value)


class SubscriptionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for subscription filtering.

    Query Parameters:
        categories (str): Comma-separated categories (exact, case-sensitive)
        billing_cycles (str): Comma-separated billing cycles
        frequencies (str): Comma-separated frequencies
        min_amount (decimal): Inclusive lower bound on amount
        max_amount (decimal): Inclusive upper bound on amount

    ``min_amount > max_amount`` is accepted and matches nothing.
    """

    categories = CommaSeparatedListField(required=False)
    billing_cycles = CommaSeparatedListField(
        choices=BillingCycle.values,
        required=False
    )
    frequencies = CommaSeparatedListField(
        choices=Frequency.values,
        required=False
    )
    min_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )
    max_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )

    def to_criteria(self) -> FilterCriteria:
        """Build FilterCriteria from validated data."""
        return FilterCriteria(**self.validated_data)


# =============================================================================
# Model Serializers
# =============================================================================

class SubscriptionSerializer(serializers.ModelSerializer):
    """
    Full subscription representation.

    Adds due-date status and normalized spend for each record. One-time
    items contribute nothing to recurring spend, so both equivalents are
    ``0.00`` for them. Records still holding a legacy billing cycle report
    ``null`` equivalents until migrated.
    """

    amount = serializers.DecimalField(
        max_digits=8,
        decimal_places=2,
        min_value=CENT,
        max_value=MAX_AMOUNT
    )
    status = serializers.SerializerMethodField()
    days_until_due = serializers.SerializerMethodField()
    monthly_equivalent = serializers.SerializerMethodField()
    yearly_equivalent = serializers.SerializerMethodField()

    class Meta:
        model = Subscription
        fields = [
            'id',
            'name',
            'amount',
            'category',
            'billing_cycle',
            'frequency',
            'next_due_date',
            'notes',
            'status',
            'days_until_due',
            'monthly_equivalent',
            'yearly_equivalent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'status',
            'days_until_due',
            'monthly_equivalent',
            'yearly_equivalent',
            'created_at',
            'updated_at',
        ]
        extra_kwargs = {
            'notes': {'required': False, 'allow_blank': True},
        }

    def _today(self):
        # Views may pin "today" through the context so one response is consistent
        return self.context.get('today') or timezone.localdate()

    def _classification(self, obj):
        return classify(obj.next_due_date, self._today())

    def get_status(self, obj) -> str:
        return self._classification(obj).status

    def get_days_until_due(self, obj) -> int:
        return self._classification(obj).days_until_due

    def _equivalent(self, obj, normalize):
        if obj.frequency == Frequency.ONE_TIME:
            return format_money(0)
        try:
            return format_money(normalize(obj.amount, obj.billing_cycle))
        except InvalidBillingCycleError:
            return None

    def get_monthly_equivalent(self, obj):
        return self._equivalent(obj, monthly_equivalent)

    def get_yearly_equivalent(self, obj):
        return self._equivalent(obj, yearly_equivalent)


# =============================================================================
# Response Serializers
# =============================================================================

class CategoryListSerializer(serializers.Serializer):
    """Categories for the category picker."""

    categories = serializers.ListField(child=serializers.CharField())
    suggested = serializers.ListField(child=serializers.CharField())
