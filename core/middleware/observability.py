"""
Observability middleware.

Gives every request a correlation ID (taken from ``X-Correlation-ID``
when the caller sends one), writes one structured log record per
request and links it to the active trace.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "HTTP_X_CORRELATION_ID"


def request_status(status_code: int) -> str:
    """Classify a response status code."""
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


def _trace_context() -> Dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format_trace_id(span_context.trace_id),
        "span_id": format_span_id(span_context.span_id),
    }


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Sets ``request.correlation_id`` before the view runs and adds the
    ``X-Correlation-ID``, ``X-Request-Duration`` and (when tracing is
    active) ``X-Trace-ID`` response headers.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.META.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        context = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            **_trace_context(),
        }
        started = time.monotonic()

        try:
            response = self.get_response(request)
        except Exception:
            logger.error(
                "Request failed",
                extra={**context, "request_status": "exception", "duration_ms": self._ms(started)},
                exc_info=True,
            )
            raise

        duration_ms = self._ms(started)
        status = request_status(response.status_code)
        self._log(status, {
            **context,
            "request_status": status,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        })

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration_ms / 1000:.3f}"
        trace_id: Optional[str] = context.get("trace_id")
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    @staticmethod
    def _ms(started: float) -> float:
        return round((time.monotonic() - started) * 1000, 2)

    @staticmethod
    def _log(status: str, extra: Dict) -> None:
        if status == "server_error":
            logger.error("Request completed with server error", extra=extra)
        elif status == "client_error":
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.info("Request completed", extra=extra)
