"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
The one-device-per-license rule is enforced here with a single
conditional UPDATE, so two concurrent claims can never both win.
"""
import logging
from typing import Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.domain.exceptions import (
    DeviceConflictError,
    LicenseNotFoundError,
    LicenseStoreUnavailableError,
)
from core.domain.value_objects import DeviceId, PhoneNumber
from licenses.domain.license import ClaimResult, LicenseRecord
from licenses.infrastructure.models import ActivationCode as ActivationCodeModel
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Maps database failures to LicenseStoreUnavailableError
    3. Implements the atomic claim
    """

    def _to_domain(self, model: ActivationCodeModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django ActivationCode model

        Returns:
            LicenseRecord domain entity
        """
        return LicenseRecord(
            id=model.id,
            phone=PhoneNumber(model.phone),
            order_id=model.order_id,
            customer_name=model.customer_name,
            customer_email=model.customer_email,
            device_id=DeviceId(model.device_id) if model.device_id else None,
            used=model.used,
            used_at=model.used_at,
            created_at=model.created_at,
        )

    async def find_by_phone(self, phone: PhoneNumber) -> Optional[LicenseRecord]:
        """
        Find a license record by canonical phone number.

        Args:
            phone: Canonical phone number

        Returns:
            LicenseRecord or None if not found
        """
        return await sync_to_async(self._find_by_phone)(phone)

    def _find_by_phone(self, phone: PhoneNumber) -> Optional[LicenseRecord]:
        try:
            # pylint: disable=no-member
            model = ActivationCodeModel.objects.filter(phone=phone.value).first()
        except DatabaseError as e:
            raise self._unavailable("find_by_phone", e) from e
        return self._to_domain(model) if model else None

    async def find_by_device_id(self, device_id: DeviceId) -> Optional[LicenseRecord]:
        """
        Find the claimed license record bound to a device.

        Args:
            device_id: Device fingerprint

        Returns:
            LicenseRecord or None if the device holds no license
        """
        return await sync_to_async(self._find_by_device_id)(device_id)

    def _find_by_device_id(self, device_id: DeviceId) -> Optional[LicenseRecord]:
        try:
            # pylint: disable=no-member
            model = (
                ActivationCodeModel.objects.filter(device_id=device_id.value, used=True)
                .order_by("used_at")
                .first()
            )
        except DatabaseError as e:
            raise self._unavailable("find_by_device_id", e) from e
        return self._to_domain(model) if model else None

    async def create_unclaimed(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        """
        Insert an unclaimed record unless one exists for the same phone.

        Args:
            record: Unclaimed LicenseRecord to insert

        Returns:
            Tuple of (stored record, created)
        """
        return await sync_to_async(self._create_unclaimed)(record)

    def _create_unclaimed(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        if record.is_claimed:
            raise ValueError("Only unclaimed records can be created")
        try:
            # pylint: disable=no-member
            existing = ActivationCodeModel.objects.filter(phone=record.phone.value).first()
            if existing:
                return self._to_domain(existing), False
            try:
                with transaction.atomic():
                    model = ActivationCodeModel.objects.create(
                        id=record.id,
                        phone=record.phone.value,
                        order_id=record.order_id,
                        customer_name=record.customer_name,
                        customer_email=record.customer_email,
                        device_id=None,
                        used=False,
                        used_at=None,
                    )
            except IntegrityError:
                # A concurrent delivery inserted the same phone first.
                existing = ActivationCodeModel.objects.get(phone=record.phone.value)
                return self._to_domain(existing), False
        except DatabaseError as e:
            raise self._unavailable("create_unclaimed", e) from e
        return self._to_domain(model), True

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
        return await sync_to_async(self._claim)(phone, device_id)

    def _claim(self, phone: PhoneNumber, device_id: DeviceId) -> ClaimResult:
        try:
            # pylint: disable=no-member
            updated = ActivationCodeModel.objects.filter(
                phone=phone.value, device_id__isnull=True
            ).update(used=True, device_id=device_id.value, used_at=timezone.now())
            model = ActivationCodeModel.objects.filter(phone=phone.value).first()
        except DatabaseError as e:
            raise self._unavailable("claim", e) from e

        if model is None:
            raise LicenseNotFoundError()

        record = self._to_domain(model)
        if updated:
            logger.info("License %s claimed by device %s", phone, device_id)
            return ClaimResult(record=record, newly_claimed=True)
        # Already bound: the entity decides between re-claim and conflict
        try:
            record = record.claim(device_id)
        except DeviceConflictError:
            logger.warning("Rejected claim of %s by device %s: bound elsewhere", phone, device_id)
            raise
        return ClaimResult(record=record, newly_claimed=False)

    @staticmethod
    def _unavailable(operation: str, error: Exception) -> LicenseStoreUnavailableError:
        logger.error("License store failure during %s: %s", operation, error, exc_info=True)
        return LicenseStoreUnavailableError()
