# ==========================================
# apps/subscriptions/admin.py
# ==========================================

from django.contrib import admin
from apps.subscriptions.models import Subscription
from apps.subscriptions.services import migrate_billing_cycles


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscriptions."""

    list_display = [
        'name',
        'user',
        'category',
        'amount',
        'billing_cycle',
        'frequency',
        'next_due_date',
        'created_at'
    ]
    list_filter = [
        'billing_cycle',
        'frequency',
        'category',
        'next_due_date'
    ]
    search_fields = [
        'name',
        'category',
        'user__email',
        'notes'
    ]
    readonly_fields = [
        'id',
        'created_at',
        'updated_at'
    ]
    list_select_related = ['user']
    date_hierarchy = 'next_due_date'
    ordering = ['next_due_date', 'name']

    fieldsets = (
        ('Basic Information', {
            'fields': (
                'id',
                'user',
                'name',
                'category',
                'notes'
            )
        }),
        ('Billing', {
            'fields': (
                'amount',
                'billing_cycle',
                'frequency',
                'next_due_date'
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['normalize_billing_cycles']

    @admin.action(description='Normalize legacy billing cycles')
    def normalize_billing_cycles(self, request, queryset):
        """Convert '2yr'/'3yr' on selected subscriptions to canonical values."""
        report = migrate_billing_cycles(queryset)
        msg = f'Updated {report.update_count} of {report.scanned} subscription(s).'
        if report.unmapped:
            msg += f' {len(report.unmapped)} with unrecognized values left for review.'
        self.message_user(request, msg)
