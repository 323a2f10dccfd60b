"""
CheckKeyQuery.

Query to look up a single key.
"""
from dataclasses import dataclass


@dataclass
class CheckKeyQuery:
    """Query to read a key by its token."""

    key: str
