"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear --legacy

This creates:
- 2 users (admin, alice)
- A realistic set of subscriptions for alice, due around today
- With --legacy, a few rows using the old '2yr'/'3yr' billing cycles
  for trying out migrate_billing_cycles
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.subscriptions.models import Subscription, BillingCycle, Frequency


# (name, category, amount, billing_cycle, frequency, due in N days)
SAMPLE_SUBSCRIPTIONS = [
    ('Netflix', 'Streaming', '15.99', BillingCycle.MONTHLY, Frequency.RECURRING, 3),
    ('Spotify', 'Music', '10.99', BillingCycle.MONTHLY, Frequency.RECURRING, 0),
    ('iCloud+', 'Cloud Services', '2.99', BillingCycle.MONTHLY, Frequency.RECURRING, 12),
    ('Adobe Creative Cloud', 'Software', '599.88', BillingCycle.YEARLY, Frequency.RECURRING, 45),
    ('Gym Membership', 'Fitness', '39.00', BillingCycle.MONTHLY, Frequency.RECURRING, -2),
    ('Car Insurance', 'Insurance', '1140.00', BillingCycle.YEARLY, Frequency.RECURRING, 6),
    ('Domain Renewal', 'Software', '30.00', BillingCycle.TWO_YEAR, Frequency.RECURRING, 120),
    ('Antivirus', 'Security', '89.97', BillingCycle.THREE_YEAR, Frequency.RECURRING, 300),
    ('Conference Ticket', 'Professional Development', '249.00', BillingCycle.MONTHLY, Frequency.ONE_TIME, 20),
    ('Rent', 'Rent', '1450.00', BillingCycle.MONTHLY, Frequency.RECURRING, 9),
]

LEGACY_SUBSCRIPTIONS = [
    ('Password Manager', 'Security', '59.98', '2yr', Frequency.RECURRING, 200),
    ('VPN', 'Security', '99.00', '3yr', Frequency.RECURRING, 400),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--legacy',
            action='store_true',
            help="Also create rows with legacy '2yr'/'3yr' billing cycles",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        created = self.create_subscriptions(users['alice'], SAMPLE_SUBSCRIPTIONS)

        if options['legacy']:
            created += self.create_subscriptions(users['alice'], LEGACY_SUBSCRIPTIONS)

        self.stdout.write(self.style.SUCCESS(f'Sample data created successfully! ({created} subscriptions)'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123')

        if options['legacy']:
            self.stdout.write('')
            self.stdout.write('Legacy rows created. Run: python manage.py migrate_billing_cycles')

    def clear_data(self):
        """Clear all data from the database."""
        Subscription.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        alice, _ = User.objects.get_or_create(
            email='alice@example.com',
            defaults={'display_name': 'Alice Budget'}
        )
        alice.set_password('password123')
        alice.save()

        return {
            'admin': admin,
            'alice': alice,
        }

    def create_subscriptions(self, user, rows):
        """Create subscriptions for a user, skipping names that already exist."""
        self.stdout.write(f'  Creating subscriptions for {user.email}...')

        today = timezone.localdate()
        created = 0
        for name, category, amount, billing_cycle, frequency, due_in in rows:
            # No field validation here, so legacy values are stored as given
            _, was_created = Subscription.objects.get_or_create(
                user=user,
                name=name,
                defaults={
                    'category': category,
                    'amount': Decimal(amount),
                    'billing_cycle': billing_cycle,
                    'frequency': frequency,
                    'next_due_date': today + timedelta(days=due_in),
                }
            )
            created += int(was_created)
        return created
