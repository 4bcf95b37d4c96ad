"""
API exception handlers.

This module maps domain exceptions to HTTP responses. Every error body
carries a human-readable ``error`` string that clients show verbatim and
a machine-readable ``code``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DeviceConflictError,
    DomainException,
    InvalidAdminKeyError,
    LicenseNotFoundError,
    LicenseStoreUnavailableError,
    ValidationException,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DEFAULT_ERROR_ENVELOPE = {"success": False}


def status_for(exc: DomainException) -> int:
    """HTTP status code for a domain exception."""
    if isinstance(exc, ValidationException):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, LicenseNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DeviceConflictError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidAdminKeyError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, LicenseStoreUnavailableError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def error_body(
    message: str, code: str, envelope: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build an error body.

    Args:
        message: Human-readable message
        code: Machine-readable error code
        envelope: Endpoint-specific flags, e.g. {"valid": False}

    Returns:
        Response body dictionary
    """
    return {**(envelope or DEFAULT_ERROR_ENVELOPE), "error": message, "code": code}


def domain_error_response(
    exc: DomainException, envelope: Optional[Dict[str, Any]] = None
) -> Response:
    """Response for a domain exception."""
    return Response(error_body(exc.message, exc.code, envelope), status=status_for(exc))


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for REST API.

    Views may declare an ``error_envelope`` attribute; its keys are merged
    into every error body so each endpoint keeps its own response shape.
    """
    view = context.get("view")
    envelope = getattr(view, "error_envelope", None)
    endpoint = view.__class__.__name__ if view else "unknown"
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
        log = logger.error if isinstance(exc, LicenseStoreUnavailableError) else logger.warning
        log(
            "Domain exception: %s - %s",
            exc.code,
            exc.message,
            extra={"correlation_id": correlation_id},
        )
        return domain_error_response(exc, envelope)

    if isinstance(exc, Http404):
        return Response(
            error_body("Resource not found", "NOT_FOUND", envelope),
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            code = str(exc.default_code).upper().replace("-", "_")
            detail = response.data.get("detail", exc.default_detail) if isinstance(
                response.data, dict
            ) else exc.default_detail
            response.data = error_body(str(detail), code, envelope)
            return response

    errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
    logger.error(
        "Unexpected error: %s",
        exc,
        extra={"correlation_id": correlation_id},
        exc_info=True,
    )
    return Response(
        error_body("An internal error occurred", "INTERNAL_ERROR", envelope),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)
