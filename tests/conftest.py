"""
Pytest configuration and shared fixtures.
"""

import pytest
from asgiref.sync import async_to_sync

from activations.domain.events import DeviceActivated
from core.domain.events import EventHandler
from core.domain.value_objects import PhoneNumber
from core.infrastructure.events import event_bus
from licenses.domain.events import LicenseCreated
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

ADMIN_KEY = "test-admin-key"


class RecordingEventHandler(EventHandler):
    """Event handler that keeps every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def sample_license():
    """Fixture for a sample unclaimed LicenseRecord entity."""
    return LicenseRecord.create(
        phone=PhoneNumber("+221771234567"),
        order_id="ORDER-1001",
        customer_name="Awa Diop",
        customer_email="awa@example.com",
    )


@pytest.fixture
def unclaimed_license(db, license_repository):
    """Factory fixture saving unclaimed licenses in the database."""

    def create(phone="+221771234567", order_id="ORDER-1001", name="Awa Diop", email=None):
        record = LicenseRecord.create(
            phone=PhoneNumber.normalize(phone),
            order_id=order_id,
            customer_name=name,
            customer_email=email,
        )
        stored, _ = async_to_sync(license_repository.create_unclaimed)(record)
        return stored

    return create


@pytest.fixture
def recorded_events():
    """Subscribe a recording handler to license lifecycle events."""
    recorder = RecordingEventHandler()
    event_bus.clear()
    event_bus.subscribe(LicenseCreated, recorder)
    event_bus.subscribe(DeviceActivated, recorder)
    yield recorder.events
    event_bus.clear()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_headers():
    """Headers accepted by the admin API."""
    return {"HTTP_X_ADMIN_KEY": ADMIN_KEY}
