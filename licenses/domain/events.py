"""
License domain events.

Domain events represent something that happened in the license domain.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseCreated(DomainEvent):
    """Event raised when an unclaimed license record is created."""

    phone: str
    order_id: str

    @classmethod
    def create(
        cls, phone: str, order_id: str, occurred_at: Optional[datetime] = None
    ) -> "LicenseCreated":
        """
        Build a LicenseCreated event.

        Args:
            phone: Canonical phone number of the new record
            order_id: Originating purchase identifier
            occurred_at: When the event occurred

        Returns:
            LicenseCreated event
        """
        return cls(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=phone,
            event_type=cls.__name__,
            phone=phone,
            order_id=order_id,
        )

    def payload(self) -> Dict[str, Any]:
        return {"phone": self.phone, "order_id": self.order_id}
