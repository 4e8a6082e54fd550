"""
Django management command to run automatic license renewals.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand

from api.v1 import container


class Command(BaseCommand):
    """Renew subscriptions with automatic renewal that are about to expire."""

    help = "Renew active subscriptions with automatic renewal expiring within the renewal window"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only list the licenses that would be renewed",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        report = async_to_sync(container.process_automatic_renewals_handler().handle)(dry_run=dry_run)

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(
                f"Found {len(report.license_ids)} license(s) expiring within "
                f"{settings.LICENSE_RENEWAL_WINDOW_DAYS} day(s)"
            )
            for license_id in report.license_ids[:10]:
                self.stdout.write(f"  - License {license_id}")
            return

        if report.failed:
            # pylint: disable=no-member
            self.stdout.write(self.style.ERROR(f"Failed to renew {report.failed} license(s)"))
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Renewed {report.processed} license(s)"))
