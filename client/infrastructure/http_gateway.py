"""
HTTP adapter for the activation gateway.

Talks to the activation service over its JSON API with ``requests``
and turns error bodies back into domain exceptions.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import requests
from asgiref.sync import sync_to_async

from client.domain.session_state import ActivationSnapshot
from client.ports.activation_gateway import ActivationGateway
from core.domain.exceptions import (
    DeviceConflictError,
    DomainException,
    InvalidDeviceIdError,
    InvalidPhoneNumberError,
    LicenseNotFoundError,
    LicenseStoreUnavailableError,
    ValidationException,
)
from core.domain.value_objects import UserProfile

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection error. Check your internet connection."

_ERRORS_BY_CODE = {
    "LICENSE_NOT_FOUND": LicenseNotFoundError,
    "DEVICE_CONFLICT": DeviceConflictError,
    "INVALID_PHONE_NUMBER": InvalidPhoneNumberError,
    "INVALID_DEVICE_ID": InvalidDeviceIdError,
    "SERVICE_UNAVAILABLE": LicenseStoreUnavailableError,
}


def error_from_body(status_code: int, body: Dict[str, Any]) -> DomainException:
    """
    Rebuild the domain exception an error response stands for.

    Args:
        status_code: HTTP status code
        body: Decoded JSON body

    Returns:
        Domain exception carrying the server's message verbatim
    """
    message = body.get("error") or "Activation failed"
    code = body.get("code")

    exc_class = _ERRORS_BY_CODE.get(code)
    if exc_class is not None:
        return exc_class(message)
    if status_code == 404:
        return LicenseNotFoundError(message)
    if status_code == 403:
        return DeviceConflictError(message)
    if 400 <= status_code < 500:
        return ValidationException(message, code=code or "VALIDATION_ERROR")
    return LicenseStoreUnavailableError(message)


class HttpActivationGateway(ActivationGateway):
    """Activation gateway backed by the service's HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize gateway.

        Args:
            base_url: Service root, e.g. ``https://niyyah.example.com``
            timeout: Per-request timeout in seconds
            session: ``requests.Session`` to send requests with
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    async def activate(self, phone: str, device_id: str) -> ActivationSnapshot:
        status_code, body = await self._send(
            "POST", "/api/v1/activate", json={"phone": phone, "deviceId": device_id}
        )
        if status_code != 200 or not body.get("success"):
            raise error_from_body(status_code, body)

        data = body.get("data") or {}
        return ActivationSnapshot(
            activated=True,
            phone=data.get("phone") or phone,
            profile=self._profile(data.get("profile"), data.get("phone") or phone),
        )

    async def check_status(self, phone: str, device_id: Optional[str] = None) -> UserProfile:
        params = {"phone": phone}
        if device_id:
            params["deviceId"] = device_id
        status_code, body = await self._send("GET", "/api/v1/activate", params=params)
        if status_code != 200 or not body.get("valid"):
            raise error_from_body(status_code, body)
        return self._profile(body.get("profile"), phone)

    async def check_device(self, device_id: str) -> ActivationSnapshot:
        status_code, body = await self._send(
            "GET", "/api/v1/check-device", params={"fingerprint": device_id}
        )
        if status_code != 200:
            raise error_from_body(status_code, body)
        if not body.get("activated"):
            return ActivationSnapshot.empty()
        return ActivationSnapshot.from_dict(body)

    async def _send(self, method: str, path: str, **kwargs) -> Tuple[int, Dict[str, Any]]:
        return await sync_to_async(self._request)(method, path, **kwargs)

    def _request(self, method: str, path: str, **kwargs) -> Tuple[int, Dict[str, Any]]:
        """
        Send one request.

        Returns:
            Tuple of (status code, decoded JSON body)

        Raises:
            LicenseStoreUnavailableError: If the service cannot be reached
                or answers with something other than a JSON object
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("Activation service unreachable: %s %s: %s", method, url, e)
            raise LicenseStoreUnavailableError(CONNECTION_ERROR_MESSAGE) from e

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(
                "Activation service returned a non-JSON body: %s %s -> %s",
                method,
                url,
                response.status_code,
            )
            raise LicenseStoreUnavailableError() from e
        if not isinstance(body, dict):
            raise LicenseStoreUnavailableError()

        return response.status_code, body

    @staticmethod
    def _profile(data: Optional[Dict[str, Any]], phone: str) -> UserProfile:
        if not isinstance(data, dict):
            return UserProfile(phone=phone)
        return UserProfile.from_dict({"phone": phone, **data})
