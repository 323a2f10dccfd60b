"""
Key deletion commands.
"""
from dataclasses import dataclass


@dataclass
class DeleteKeyCommand:
    """Command to delete one key by token."""

    key: str


@dataclass
class DeleteExpiredKeysCommand:
    """Command to delete every expired key of an application."""

    app_id: str
