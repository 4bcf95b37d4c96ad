"""
License store port (interface).

This defines the contract for license record persistence.
Implementations are in the infrastructure layer and are only ever
used by the server-side activation service.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from core.domain.value_objects import DeviceId, PhoneNumber
from licenses.domain.license import ClaimResult, LicenseRecord


class LicenseRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    Every method raises LicenseStoreUnavailableError when the backing
    store cannot be reached; "not found" is only ever reported for a
    store that answered.
    """

    @abstractmethod
    async def find_by_phone(self, phone: PhoneNumber) -> Optional[LicenseRecord]:
        """
        Find a license record by canonical phone number.

        Args:
            phone: Canonical phone number

        Returns:
            LicenseRecord or None if not found
        """
        pass

    @abstractmethod
    async def find_by_device_id(self, device_id: DeviceId) -> Optional[LicenseRecord]:
        """
        Find the claimed license record bound to a device.

        Args:
            device_id: Device fingerprint

        Returns:
            LicenseRecord or None if the device holds no license
        """
        pass

    @abstractmethod
    async def create_unclaimed(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        """
        Insert an unclaimed record unless one exists for the same phone.

        Args:
            record: Unclaimed LicenseRecord to insert

        Returns:
            Tuple of (stored record, created). When a record already
            existed it is returned untouched with created=False.
        """
        pass

    @abstractmethod
    async def claim(self, phone: PhoneNumber, device_id: DeviceId) -> ClaimResult:
        """
        Atomically bind the record for ``phone`` to ``device_id``.

        Args:
            phone: Canonical phone number
            device_id: Device fingerprint claiming the license

        Returns:
            ClaimResult; newly_claimed is False for an idempotent re-claim

        Raises:
            LicenseNotFoundError: If no record exists for the phone
            DeviceConflictError: If another device holds the record
        """
        pass
