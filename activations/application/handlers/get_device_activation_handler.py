"""
GetDeviceActivationHandler.

Looks up the license bound to a device fingerprint. Used by clients to
restore a session after local storage was cleared; a device with no
license is the normal first-run state, not an error.
"""
from activations.application.dto.activation_dto import DeviceActivationDTO
from activations.application.queries.get_device_activation import GetDeviceActivationQuery
from core.domain.value_objects import DeviceId
from core.metrics import status_checks_total
from licenses.ports.license_repository import LicenseRepository


class GetDeviceActivationHandler:
    """Handler for GetDeviceActivationQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: GetDeviceActivationQuery) -> DeviceActivationDTO:
        """
        Handle get device activation query.

        Raises:
            InvalidDeviceIdError: If the fingerprint is missing
            LicenseStoreUnavailableError: If the store cannot be reached
        """
        device_id = DeviceId.parse(query.device_id)
        record = await self.license_repository.find_by_device_id(device_id)
        if record is None:
            status_checks_total.labels(kind="device", outcome="not_activated").inc()
            return DeviceActivationDTO(activated=False)

        status_checks_total.labels(kind="device", outcome="activated").inc()
        return DeviceActivationDTO(
            activated=True,
            phone=str(record.phone),
            profile=record.profile,
        )
