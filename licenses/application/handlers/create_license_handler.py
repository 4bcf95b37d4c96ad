"""
CreateLicenseHandler.

Handles the create license command. Creation is idempotent per phone
number, so a repeated sale notification or a second admin entry for the
same buyer leaves the existing record untouched.
"""
import logging
import time

from core.domain.value_objects import PhoneNumber
from core.infrastructure.events import event_bus
from core.metrics import licenses_created_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.dto.license_record_dto import CreateLicenseResponseDTO, LicenseRecordDTO
from licenses.domain.events import LicenseCreated
from licenses.domain.license import LicenseRecord
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MANUAL_ORDER_PREFIX = "MANUAL"
MANUAL_CUSTOMER_NAME = "Manual Entry"


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: CreateLicenseCommand) -> CreateLicenseResponseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            CreateLicenseResponseDTO with the stored record

        Raises:
            InvalidPhoneNumberError: If the phone number is malformed
            LicenseStoreUnavailableError: If the store cannot be reached
        """
        phone = PhoneNumber.normalize(command.phone)
        order_id = (command.order_id or "").strip() or (
            f"{MANUAL_ORDER_PREFIX}-{int(time.time() * 1000)}"
        )
        customer_name = (command.customer_name or "").strip() or MANUAL_CUSTOMER_NAME

        record = LicenseRecord.create(
            phone=phone,
            order_id=order_id,
            customer_name=customer_name,
            customer_email=(command.customer_email or "").strip() or None,
        )
        stored, created = await self.license_repository.create_unclaimed(record)

        if created:
            licenses_created_total.inc()
            logger.info("Created license for %s (order %s)", phone, order_id)
            await event_bus.publish(LicenseCreated.create(phone=str(phone), order_id=order_id))
            message = f"Activation code created for {phone}"
        else:
            logger.info("License for %s already exists, nothing to do", phone)
            message = f"Activation code already exists for {phone}"

        return CreateLicenseResponseDTO(
            license=LicenseRecordDTO(
                id=stored.id,
                phone=str(stored.phone),
                order_id=stored.order_id,
                customer_name=stored.customer_name,
                customer_email=stored.customer_email,
                used=stored.used,
                used_at=stored.used_at,
                created_at=stored.created_at,
            ),
            created=created,
            message=message,
        )
