"""
Django management command to delete expired keys of an application.

This command can be run periodically (e.g., via cron or scheduled task).
Expired keys are deleted, never flipped to the expired status.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from keys.application.commands.delete_keys import DeleteExpiredKeysCommand
from keys.application.handlers.key_lifecycle_handlers import DeleteExpiredKeysHandler
from keys.infrastructure.container import build_key_manager
from keys.infrastructure.models import Key as KeyModel

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to delete expired keys."""

    help = "Delete keys of an application whose expiry has passed"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--app-id",
            type=str,
            required=True,
            help="Application whose expired keys are deleted",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - only report what would be deleted",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        app_id = options["app_id"]

        if options["dry_run"]:
            # pylint: disable=no-member
            expired = KeyModel.objects.filter(
                app_id=app_id, expires_at__isnull=False, expires_at__lt=timezone.now()
            )
            self.stdout.write(f"Found {expired.count()} expired key(s)")
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for key in expired[:10]:
                self.stdout.write(f"  - Key {key.key} expired at {key.expires_at}")
            return

        handler = DeleteExpiredKeysHandler(key_manager=build_key_manager())
        result = async_to_sync(handler.handle)(DeleteExpiredKeysCommand(app_id=app_id))
        logger.info("Deleted %d expired keys for app %s", result.deleted_count, app_id)

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Successfully deleted {result.deleted_count} expired keys.")
        )
