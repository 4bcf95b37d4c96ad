"""
Admin key authentication middleware.

This middleware guards the back-office API with a shared secret sent
in the ``X-Admin-Key`` header.
"""

import hmac
import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.exceptions import InvalidAdminKeyError

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


class AdminKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin key authentication.

    This middleware:
    1. Leaves every path outside /api/v1/admin/ alone
    2. Returns 503 when no admin secret is configured
    3. Returns 401 when the header is missing or wrong
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/503 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None

        expected = getattr(settings, "ADMIN_SECRET_KEY", "") or ""
        if not expected:
            logger.error("ADMIN_SECRET_KEY is not configured, admin API disabled")
            return JsonResponse(
                {
                    "success": False,
                    "error": "Admin API is not configured",
                    "code": "ADMIN_DISABLED",
                },
                status=503,
            )

        provided = request.headers.get("X-Admin-Key", "")
        if not hmac.compare_digest(provided.encode(), expected.encode()):
            error = InvalidAdminKeyError()
            logger.warning(
                "Rejected admin request to %s",
                request.path,
                extra={"remote_addr": request.META.get("REMOTE_ADDR")},
            )
            return JsonResponse(
                {"success": False, "error": error.message, "code": error.code},
                status=401,
            )

        return None
