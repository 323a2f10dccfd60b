"""
Per-application key queries.
"""
from dataclasses import dataclass


@dataclass
class ListKeysQuery:
    """Query to list every key of an application."""

    app_id: str


@dataclass
class GetKeyStatsQuery:
    """Query to count the keys of an application."""

    app_id: str
