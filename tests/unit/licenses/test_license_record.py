"""
Unit tests for LicenseRecord domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import DeviceConflictError
from core.domain.value_objects import DeviceId, PhoneNumber
from licenses.domain.license import LicenseRecord


class TestLicenseRecord:
    """Tests for LicenseRecord domain entity."""

    def test_create_is_unclaimed(self, sample_license):
        """Test a new record has no device binding."""
        assert sample_license.used is False
        assert sample_license.device_id is None
        assert sample_license.used_at is None
        assert sample_license.is_claimed is False
        assert isinstance(sample_license.id, uuid.UUID)

    def test_create_blank_optional_fields_become_none(self):
        """Test empty name and email are stored as None."""
        record = LicenseRecord.create(
            phone=PhoneNumber("+221771234567"),
            order_id="ORDER-1",
            customer_name="",
            customer_email="",
        )
        assert record.customer_name is None
        assert record.customer_email is None

    def test_order_id_required(self):
        """Test order id is mandatory."""
        with pytest.raises(ValueError, match="Order ID"):
            LicenseRecord.create(phone=PhoneNumber("+221771234567"), order_id="")

    def test_claim_binds_device(self, sample_license):
        """Test claiming an unclaimed record."""
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        claimed = sample_license.claim(DeviceId("device-a"), now=now)

        assert claimed.used is True
        assert claimed.device_id == DeviceId("device-a")
        assert claimed.used_at == now
        # Entities are immutable
        assert sample_license.device_id is None

    def test_reclaim_by_same_device_keeps_used_at(self, sample_license):
        """Test re-claiming by the bound device is a no-op."""
        first = datetime(2026, 1, 1, tzinfo=timezone.utc)
        claimed = sample_license.claim(DeviceId("device-a"), now=first)

        again = claimed.claim(DeviceId("device-a"), now=first + timedelta(days=3))

        assert again is claimed
        assert again.used_at == first

    def test_claim_by_other_device_conflicts(self, sample_license):
        """Test a second device cannot take the license."""
        claimed = sample_license.claim(DeviceId("device-a"))

        with pytest.raises(DeviceConflictError, match="another device"):
            claimed.claim(DeviceId("device-b"))

    def test_bound_elsewhere(self, sample_license):
        """Test conflict detection helpers."""
        claimed = sample_license.claim(DeviceId("device-a"))

        assert claimed.is_bound_to(DeviceId("device-a")) is True
        assert claimed.is_bound_elsewhere(DeviceId("device-a")) is False
        assert claimed.is_bound_elsewhere(DeviceId("device-b")) is True
        assert claimed.is_bound_elsewhere(None) is False
        assert sample_license.is_bound_elsewhere(DeviceId("device-b")) is False

    def test_used_requires_device(self, sample_license):
        """Test the used flag cannot be set without a device."""
        with pytest.raises(ValueError, match="bound to a device"):
            LicenseRecord(
                id=sample_license.id,
                phone=sample_license.phone,
                order_id=sample_license.order_id,
                customer_name=None,
                customer_email=None,
                device_id=None,
                used=True,
                used_at=datetime.now(timezone.utc),
                created_at=sample_license.created_at,
            )

    def test_device_requires_used(self, sample_license):
        """Test a device binding cannot exist on an unused record."""
        with pytest.raises(ValueError, match="unused license"):
            LicenseRecord(
                id=sample_license.id,
                phone=sample_license.phone,
                order_id=sample_license.order_id,
                customer_name=None,
                customer_email=None,
                device_id=DeviceId("device-a"),
                used=False,
                used_at=None,
                created_at=sample_license.created_at,
            )

    def test_profile(self, sample_license):
        """Test profile derived from the record."""
        profile = sample_license.profile

        assert profile.phone == "+221771234567"
        assert profile.name == "Awa Diop"
        assert profile.first_name == "Awa"
        assert profile.email == "awa@example.com"
