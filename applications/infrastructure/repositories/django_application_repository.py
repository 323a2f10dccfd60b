"""
Django implementation of ApplicationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

from typing import Optional

from asgiref.sync import sync_to_async

from applications.domain.application import Application
from applications.infrastructure.models import Application as ApplicationModel
from applications.ports.application_repository import ApplicationRepository


class DjangoApplicationRepository(ApplicationRepository):
    """Django ORM implementation of ApplicationRepository."""

    def _to_domain(self, model: ApplicationModel) -> Application:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Application model

        Returns:
            Application domain entity
        """
        return Application(
            app_id=model.app_id,
            owner_id=model.owner_id,
            name=model.name,
        )

    @sync_to_async
    def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        # pylint: disable=no-member
        model, _ = ApplicationModel.objects.update_or_create(
            app_id=application.app_id,
            defaults={
                "owner_id": application.owner_id,
                "name": application.name,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_app_id(self, app_id: str) -> Optional[Application]:
        """
        Find an application by its identifier.

        Args:
            app_id: Application identifier

        Returns:
            Application entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = ApplicationModel.objects.get(app_id=app_id)
            return self._to_domain(model)
        except ApplicationModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def exists(self, app_id: str) -> bool:
        """
        Check if an application exists.

        Args:
            app_id: Application identifier

        Returns:
            True if application exists, False otherwise
        """
        # pylint: disable=no-member
        return ApplicationModel.objects.filter(app_id=app_id).exists()
