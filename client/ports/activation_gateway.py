"""
Activation gateway port (interface).

This defines the contract for talking to the activation service.
Implementations raise the shared domain exceptions so callers can tell
"no license" from "try again".
"""
from abc import ABC, abstractmethod
from typing import Optional

from client.domain.session_state import ActivationSnapshot
from core.domain.value_objects import UserProfile


class ActivationGateway(ABC):
    """Abstract gateway for the activation service."""

    @abstractmethod
    async def activate(self, phone: str, device_id: str) -> ActivationSnapshot:
        """
        Bind the license of a phone number to this device.

        Raises:
            ValidationException: If the input is rejected
            LicenseNotFoundError: If no license exists for the phone
            DeviceConflictError: If the license is bound to another device
            LicenseStoreUnavailableError: On transport or server failure
        """
        pass

    @abstractmethod
    async def check_status(self, phone: str, device_id: Optional[str] = None) -> UserProfile:
        """
        Check a phone number's license without mutating it.

        Raises:
            LicenseNotFoundError: If no license exists for the phone
            DeviceConflictError: If the license is bound to another device
            LicenseStoreUnavailableError: On transport or server failure
        """
        pass

    @abstractmethod
    async def check_device(self, device_id: str) -> ActivationSnapshot:
        """
        Look up the activation bound to a device.

        Returns an inactive snapshot when the device has none.

        Raises:
            LicenseStoreUnavailableError: On transport or server failure
        """
        pass
