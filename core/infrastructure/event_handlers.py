"""
Event handlers for domain events.

These handlers process domain events for side effects such as
the audit trail.
"""

import logging

from activations.domain.events import DeviceActivated
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import LicenseCreated

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")


class AuditLogEventHandler(EventHandler):
    """Writes every license lifecycle event to the ``audit`` logger."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


def register_event_handlers():
    """Register event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    event_bus.subscribe(LicenseCreated, audit_handler)
    event_bus.subscribe(DeviceActivated, audit_handler)

    logger.info("Event handlers registered")
