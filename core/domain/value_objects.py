"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Duration(ValueObject):
    """Key validity period in whole days."""

    days: int

    def __post_init__(self):
        """Validate duration."""
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise ValueError(f"Duration must be a whole number of days: {self.days!r}")
        if self.days < 1:
            raise ValueError("Duration must be at least one day")

    @classmethod
    def from_days(cls, days: Optional[int]) -> Optional["Duration"]:
        """
        Build a duration from a raw day count.

        A missing or zero day count means the key never expires.

        Args:
            days: Number of days, or None

        Returns:
            Duration instance, or None for "never expires"
        """
        if not days:
            return None
        return cls(days)

    def expires_at(self, issued_at: datetime) -> datetime:
        """Return the expiry timestamp for a key issued at ``issued_at``."""
        return issued_at + timedelta(days=self.days)

    def __str__(self) -> str:
        """Return duration as string."""
        return f"{self.days}d"


class KeyStatus(Enum):
    """Key status value object."""

    UNUSED = "unused"
    USED = "used"
    EXPIRED = "expired"

    def can_transition_to(self, target: "KeyStatus") -> bool:
        """
        Check whether moving to ``target`` keeps the lifecycle monotonic.

        Statuses only move forward: unused -> used -> expired.

        Args:
            target: Desired status

        Returns:
            True if the transition is allowed
        """
        order = [KeyStatus.UNUSED, KeyStatus.USED, KeyStatus.EXPIRED]
        return order.index(target) > order.index(self)

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class Entitlement(Enum):
    """Resolved entitlement of a requester."""

    UNKNOWN = "unknown"
    DISABLED = "disabled"
    ENABLED = "enabled"

    @property
    def is_authorized(self) -> bool:
        """Only an explicitly enabled requester is authorized."""
        return self is Entitlement.ENABLED

    def __str__(self) -> str:
        """Return entitlement as string."""
        return self.value
