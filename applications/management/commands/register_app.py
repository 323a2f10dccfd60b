"""
Django management command to register an application.

Applications are created out-of-band; the key service only checks that
they exist before issuing keys.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from applications.domain.application import Application
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to register (or rename) an application."""

    help = "Register an application that keys can be issued for"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--app-id", type=str, required=True, help="Unique application ID")
        parser.add_argument("--owner-id", type=str, required=True, help="Owner identity")
        parser.add_argument("--name", type=str, required=True, help="Display name")

    def handle(self, *args, **options):
        """Execute the command."""
        try:
            application = Application.create(
                app_id=options["app_id"],
                owner_id=options["owner_id"],
                name=options["name"],
            )
        except ValueError as e:
            raise CommandError(str(e)) from e

        repository = DjangoApplicationRepository()
        existing = async_to_sync(repository.find_by_app_id)(application.app_id)
        saved = async_to_sync(repository.save)(application)
        verb = "Updated" if existing else "Registered"
        logger.info("%s application %s", verb, saved.app_id)

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"{verb} application: {saved.name} (app_id: {saved.app_id})")
        )
