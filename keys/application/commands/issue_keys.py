"""
Key issuance commands.

Commands to issue one key or a batch of keys for an application.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueKeyCommand:
    """Command to issue a single key."""

    app_id: str
    duration_days: Optional[int] = None


@dataclass
class IssueBulkKeysCommand:
    """
    Command to issue several keys at once.

    All keys share one expiry and are stored as a single batch.
    """

    app_id: str
    quantity: int
    duration_days: Optional[int] = None
