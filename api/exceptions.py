"""
API exception handlers.

Every failure leaves the API in the command envelope shape
``{"success": false, "message": ...}``. Internal details (store errors,
stack traces) only go to the logs.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

from core.domain.exceptions import (
    ApplicationNotFoundError,
    DomainException,
    KeyConflictError,
    KeyNotFoundError,
    PermissionDeniedError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error occurred."

_DOMAIN_STATUS_CODES = (
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    ((ApplicationNotFoundError, KeyNotFoundError), status.HTTP_404_NOT_FOUND),
    (KeyConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for_domain_exception(exc: DomainException) -> int:
    """
    Map a domain exception to an HTTP status code.

    Args:
        exc: Domain exception

    Returns:
        HTTP status code (400 for unmapped domain errors)
    """
    for exc_types, status_code in _DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_types):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_body(message: str, errors: Optional[Any] = None) -> Dict[str, Any]:
    """Build the failure envelope."""
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        status_code = status_for_domain_exception(exc)
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message,
            extra={"correlation_id": correlation_id},
        )
        return Response(error_body(exc.message), status=status_code)

    if isinstance(exc, APIException):
        detail = exc.detail
        if isinstance(detail, (dict, list)):
            return Response(error_body("Malformed request.", detail), status=exc.status_code)
        return Response(error_body(str(detail)), status=exc.status_code)

    if isinstance(exc, Http404):
        return Response(error_body("Resource not found."), status=status.HTTP_404_NOT_FOUND)

    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    return Response(error_body(SERVER_ERROR_MESSAGE), status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)
