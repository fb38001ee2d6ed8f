# Generated manually to normalize legacy billing cycles
from django.db import migrations
from django.utils import timezone


# Frozen copy of the mapping at the time of this migration
LEGACY_CYCLES = {
    '2yr': 'twoYear',
    '3yr': 'threeYear',
}


def normalize_billing_cycles(apps, schema_editor):
    """Rewrite '2yr'/'3yr' as 'twoYear'/'threeYear'. Unknown values are left alone."""
    Subscription = apps.get_model('subscriptions', 'Subscription')

    now = timezone.now()
    for old, new in LEGACY_CYCLES.items():
        Subscription.objects.filter(billing_cycle=old).update(
            billing_cycle=new,
            updated_at=now,
        )


def reverse_normalize(apps, schema_editor):
    """Reverse the fix (for rollback)."""
    # Canonical values are valid in both directions
    pass


class Migration(migrations.Migration):

    dependencies = [
        ('subscriptions', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(normalize_billing_cycles, reverse_normalize),
    ]
