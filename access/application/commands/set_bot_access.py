"""
SetBotAccessCommand.

Command to enable or disable a caller's access to the key service.
"""
from dataclasses import dataclass


@dataclass
class SetBotAccessCommand:
    """Command to set the entitlement flag of a caller."""

    target_id: str
    enabled: bool
