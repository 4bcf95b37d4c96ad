"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class DeviceActivated(DomainEvent):
    """Event raised when a license is bound to a device for the first time."""

    phone: str
    device_id: str

    @classmethod
    def create(
        cls, phone: str, device_id: str, occurred_at: Optional[datetime] = None
    ) -> "DeviceActivated":
        """
        Build a DeviceActivated event.

        Args:
            phone: Canonical phone number of the claimed record
            device_id: Fingerprint of the claiming device
            occurred_at: When the claim happened

        Returns:
            DeviceActivated event
        """
        return cls(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=phone,
            event_type=cls.__name__,
            phone=phone,
            device_id=device_id,
        )

    def payload(self) -> Dict[str, Any]:
        return {"phone": self.phone, "device_id": self.device_id}
