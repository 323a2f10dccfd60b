"""
Application domain entity.

An application is the namespace that license keys are issued for.
Registration happens outside the key service; the core only reads it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Application:
    """
    Application domain entity.

    Represents a registered application owning a set of keys.
    """

    app_id: str
    owner_id: str
    name: str

    def __post_init__(self):
        """Validate application entity."""
        if not self.app_id or len(self.app_id.strip()) == 0:
            raise ValueError("Application ID cannot be empty")
        if len(self.app_id) > 100:
            raise ValueError("Application ID too long")
        if not self.owner_id or len(self.owner_id.strip()) == 0:
            raise ValueError("Owner ID cannot be empty")
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Application name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Application name too long")

    @classmethod
    def create(cls, app_id: str, owner_id: str, name: str) -> "Application":
        """
        Create a new Application entity.

        Args:
            app_id: Unique application identifier
            owner_id: Identity of the registering party
            name: Display name

        Returns:
            Application entity instance
        """
        return cls(
            app_id=app_id.strip(),
            owner_id=owner_id.strip(),
            name=name.strip(),
        )
