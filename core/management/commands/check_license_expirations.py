"""
Django management command to mark lapsed licenses as expired.

Meant to run periodically (cron, or the Celery beat schedule).
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from api.v1 import container


class Command(BaseCommand):
    """Command to store the expired status of lapsed licenses."""

    help = "Mark licenses whose expiry date has passed as expired"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only list the licenses that would be marked",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        report = async_to_sync(container.sweep_license_statuses_handler().handle)(dry_run=dry_run)

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(f"Found {len(report.license_ids)} lapsed license(s)")
            for license_id in report.license_ids[:10]:
                self.stdout.write(f"  - License {license_id}")
            return

        if report.failed:
            # pylint: disable=no-member
            self.stdout.write(self.style.ERROR(f"Failed to expire {report.failed} license(s)"))
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Marked {report.processed} license(s) as expired"))
