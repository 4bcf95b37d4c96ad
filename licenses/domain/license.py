"""
License record domain entity.

A license record is the unit of entitlement: one purchase, keyed by the
buyer's canonical phone number, bound to at most one device.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import DeviceConflictError
from core.domain.value_objects import DeviceId, PhoneNumber, UserProfile


@dataclass(frozen=True)
class LicenseRecord:
    """
    License record domain entity.

    Invariants:
    - ``used`` is False only while ``device_id`` is None
    - once ``device_id`` is set, only that device may activate
    """

    id: uuid.UUID
    phone: PhoneNumber
    order_id: str
    customer_name: Optional[str]
    customer_email: Optional[str]
    device_id: Optional[DeviceId]
    used: bool
    used_at: Optional[datetime]
    created_at: datetime

    def __post_init__(self):
        """Validate license record."""
        if not self.order_id:
            raise ValueError("Order ID is required")
        if not self.used and self.device_id is not None:
            raise ValueError("An unused license cannot be bound to a device")
        if self.device_id is not None and self.used_at is None:
            raise ValueError("A claimed license must record when it was claimed")
        if self.used and self.device_id is None:
            raise ValueError("A used license must be bound to a device")

    @classmethod
    def create(
        cls,
        phone: PhoneNumber,
        order_id: str,
        customer_name: Optional[str] = None,
        customer_email: Optional[str] = None,
        record_id: Optional[uuid.UUID] = None,
    ) -> "LicenseRecord":
        """
        Create a new unclaimed LicenseRecord.

        Args:
            phone: Canonical phone number
            order_id: Originating purchase identifier
            customer_name: Optional display name
            customer_email: Optional display email
            record_id: Optional UUID (generated if not provided)

        Returns:
            Unclaimed LicenseRecord
        """
        return cls(
            id=record_id or uuid.uuid4(),
            phone=phone,
            order_id=order_id,
            customer_name=customer_name or None,
            customer_email=customer_email or None,
            device_id=None,
            used=False,
            used_at=None,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_claimed(self) -> bool:
        return self.device_id is not None

    def is_bound_to(self, device_id: DeviceId) -> bool:
        """True when this record is claimed by exactly ``device_id``."""
        return self.device_id is not None and self.device_id == device_id

    def is_bound_elsewhere(self, device_id: Optional[DeviceId]) -> bool:
        """
        True when the record is claimed by a device other than ``device_id``.

        An unknown caller device (None) never conflicts; status checks
        without a device id only ask whether a license exists.
        """
        if device_id is None or self.device_id is None:
            return False
        return self.device_id != device_id

    def claim(self, device_id: DeviceId, now: Optional[datetime] = None) -> "LicenseRecord":
        """
        Bind this record to a device.

        Re-claiming by the bound device returns the record unchanged,
        keeping the original ``used_at``.

        Raises:
            DeviceConflictError: If another device already holds the record
        """
        if self.is_bound_elsewhere(device_id):
            raise DeviceConflictError()
        if self.is_bound_to(device_id):
            return self
        return replace(
            self,
            device_id=device_id,
            used=True,
            used_at=now or datetime.now(timezone.utc),
        )

    @property
    def profile(self) -> UserProfile:
        """Display profile for the record owner."""
        return UserProfile(
            phone=str(self.phone),
            name=self.customer_name,
            email=self.customer_email,
        )


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a successful claim."""

    record: LicenseRecord
    newly_claimed: bool
