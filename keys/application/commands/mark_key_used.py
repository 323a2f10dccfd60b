"""
MarkKeyUsedCommand.

Command to record that a key has been redeemed.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class MarkKeyUsedCommand:
    """Command to move an unused key to the used status."""

    key: str
    user_discord_id: Optional[str] = None
