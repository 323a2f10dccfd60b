"""
Django model registry for the applications app.

The model lives in ``infrastructure``; importing it here makes it the
app's models module so ``migrate`` creates its table.
"""

from applications.infrastructure.models import Application

__all__ = ["Application"]
