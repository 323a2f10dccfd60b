"""Django model registry for the access app."""

from access.infrastructure.models import BotUser

__all__ = ["BotUser"]
