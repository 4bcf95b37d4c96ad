"""
ActivateDeviceHandler.

Handler for binding a license to a device. This is the only operation
that mutates a license record.
"""
import logging

from activations.application.commands.activate_device import ActivateDeviceCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.events import DeviceActivated
from core.domain.exceptions import DeviceConflictError, LicenseNotFoundError
from core.domain.value_objects import DeviceId, PhoneNumber
from core.infrastructure.events import event_bus
from core.metrics import activations_total
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ActivateDeviceHandler:
    """Handler for ActivateDeviceCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ActivateDeviceCommand) -> ActivationResultDTO:
        """
        Handle activate device command.

        Args:
            command: ActivateDeviceCommand

        Returns:
            ActivationResultDTO with profile and activation time

        Raises:
            InvalidPhoneNumberError: If the phone number is malformed
            InvalidDeviceIdError: If the device id is missing
            LicenseNotFoundError: If no license exists for the phone
            DeviceConflictError: If the license is bound to another device
            LicenseStoreUnavailableError: If the store cannot be reached
        """
        phone = PhoneNumber.normalize(command.phone)
        device_id = DeviceId.parse(command.device_id)

        try:
            result = await self.license_repository.claim(phone, device_id)
        except LicenseNotFoundError:
            activations_total.labels(outcome="not_found").inc()
            logger.info("Activation refused: no license for %s", phone)
            raise
        except DeviceConflictError:
            activations_total.labels(outcome="conflict").inc()
            raise

        record = result.record
        if result.newly_claimed:
            activations_total.labels(outcome="activated").inc()
            await event_bus.publish(
                DeviceActivated.create(
                    phone=str(record.phone),
                    device_id=str(device_id),
                    occurred_at=record.used_at,
                )
            )
        else:
            activations_total.labels(outcome="reactivated").inc()
            logger.info("License %s re-activated on its bound device", phone)

        return ActivationResultDTO(
            phone=str(record.phone),
            device_id=str(device_id),
            activated_at=record.used_at,
            profile=record.profile,
            already_activated=not result.newly_claimed,
        )
