"""
GetActivationStatusHandler.

Read-only check of a phone number's license, optionally against the
device asking.
"""
from typing import Optional

from activations.application.dto.activation_dto import ActivationStatusDTO
from activations.application.queries.get_activation_status import GetActivationStatusQuery
from core.domain.exceptions import DeviceConflictError, LicenseNotFoundError
from core.domain.value_objects import DeviceId, PhoneNumber
from core.metrics import status_checks_total
from licenses.ports.license_repository import LicenseRepository


class GetActivationStatusHandler:
    """Handler for GetActivationStatusQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: GetActivationStatusQuery) -> ActivationStatusDTO:
        """
        Handle get activation status query.

        Args:
            query: GetActivationStatusQuery

        Returns:
            ActivationStatusDTO with valid=True and the owner's profile

        Raises:
            InvalidPhoneNumberError: If the phone number is malformed
            LicenseNotFoundError: If no license exists for the phone
            DeviceConflictError: If the license is bound to another device
        """
        phone = PhoneNumber.normalize(query.phone)
        device_id: Optional[DeviceId] = None
        if query.device_id is not None and str(query.device_id).strip():
            device_id = DeviceId.parse(query.device_id)

        record = await self.license_repository.find_by_phone(phone)
        if record is None:
            status_checks_total.labels(kind="phone", outcome="not_found").inc()
            raise LicenseNotFoundError()
        if record.is_bound_elsewhere(device_id):
            status_checks_total.labels(kind="phone", outcome="conflict").inc()
            raise DeviceConflictError()

        status_checks_total.labels(kind="phone", outcome="valid").inc()
        return ActivationStatusDTO(valid=True, profile=record.profile)
