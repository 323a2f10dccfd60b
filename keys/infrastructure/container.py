"""
Wiring of the key lifecycle manager to its Django adapters.
"""

from django.conf import settings

from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from keys.domain.services import KeyLifecycleManager
from keys.infrastructure.repositories.django_key_repository import DjangoKeyRepository


def build_key_manager() -> KeyLifecycleManager:
    """
    Build a KeyLifecycleManager backed by the Django ORM.

    Returns:
        KeyLifecycleManager configured from settings
    """
    return KeyLifecycleManager(
        key_repository=DjangoKeyRepository(),
        application_repository=DjangoApplicationRepository(),
        max_token_attempts=settings.KEY_TOKEN_MAX_ATTEMPTS,
    )
