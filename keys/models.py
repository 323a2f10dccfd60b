"""Django model registry for the keys app."""

from keys.infrastructure.models import Key

__all__ = ["Key"]
