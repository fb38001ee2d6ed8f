"""
Management command to normalize legacy billing cycles.

Early data stored two- and three-year cycles as '2yr' and '3yr'. This
rewrites them as 'twoYear' and 'threeYear' in a single transaction. Safe to
run repeatedly: a second run finds nothing to change.

Usage:
    python manage.py migrate_billing_cycles --dry-run
    python manage.py migrate_billing_cycles
    python manage.py migrate_billing_cycles --coerce-unmapped
"""

from django.core.management.base import BaseCommand, CommandError

from apps.subscriptions.services import migrate_billing_cycles


class Command(BaseCommand):
    help = 'Normalize legacy billing cycle values (one-time data fix)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )
        parser.add_argument(
            '--coerce-unmapped',
            action='store_true',
            help="Set unrecognized billing cycles to 'monthly' instead of only listing them",
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        coerce_unmapped = options['coerce_unmapped']

        try:
            report = migrate_billing_cycles(
                dry_run=dry_run,
                coerce_unmapped=coerce_unmapped,
            )
        except Exception as e:
            raise CommandError(f'Migration failed, no records were changed: {e}')

        self.stdout.write(f'\nScanned {report.scanned} subscription(s).')

        if report.unmapped:
            self.stdout.write(
                self.style.WARNING(
                    f'\n{len(report.unmapped)} subscription(s) with unrecognized billing cycles:'
                )
            )
            for record_id, raw in report.unmapped:
                self.stdout.write(f'  - {record_id} | {raw!r}')
            if not coerce_unmapped:
                self.stdout.write('Left unchanged. Re-run with --coerce-unmapped to set them to monthly.')

        if not report.updates:
            self.stdout.write(
                self.style.SUCCESS('No billing cycles need fixing. All good!')
            )
            return

        self.stdout.write(f'\nFound {report.update_count} subscription(s) to update:\n')
        for record_id, old, new in report.updates:
            self.stdout.write(f'  - {record_id} | {old!r} -> {new!r}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        self.stdout.write(
            self.style.SUCCESS(f'\nSuccessfully updated {report.written} subscription(s)!')
        )
        skipped = report.update_count - report.written
        if skipped:
            self.stdout.write(
                self.style.WARNING(f'{skipped} subscription(s) were edited during the run and left unchanged.')
            )
