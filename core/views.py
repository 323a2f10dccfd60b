"""
Core views for health checks and metrics.
"""

import logging

from django.db import DatabaseError, connection
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "key-issuance-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError:
            logger.error("Database health check failed", exc_info=True)
            return JsonResponse(
                {"status": "unhealthy", "database": "disconnected"},
                status=503,
            )
        return JsonResponse({"status": "healthy", "database": "connected"})


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        """Render every registered metric in the text exposition format."""
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
