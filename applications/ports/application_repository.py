"""
Application repository port (interface).

This defines the contract for application persistence operations.
Implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Optional

from applications.domain.application import Application


class ApplicationRepository(ABC):
    """
    Abstract repository for Application entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        pass

    @abstractmethod
    async def find_by_app_id(self, app_id: str) -> Optional[Application]:
        """
        Find an application by its identifier.

        Args:
            app_id: Application identifier

        Returns:
            Application entity or None if not found
        """
        pass

    @abstractmethod
    async def exists(self, app_id: str) -> bool:
        """
        Check if an application exists.

        Args:
            app_id: Application identifier

        Returns:
            True if application exists, False otherwise
        """
        pass
