"""
App configuration for Key Issuance Service.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class KeyIssuanceServiceConfig(AppConfig):
    """App configuration for KeyIssuanceService."""

    name = "KeyIssuanceService"
    verbose_name = "Key Issuance Service"

    def ready(self):
        """Called when Django starts."""
        if not settings.OTEL_ENABLED:
            return

        # Only setup once (Django may call ready() more than once under the reloader)
        if getattr(self, "_initialized", False):
            return

        from core.instrumentation import setup_opentelemetry  # pylint: disable=import-outside-toplevel

        logger.info("Setting up observability...")
        setup_opentelemetry()
        self._initialized = True
        logger.info("Observability setup complete")
