"""
Integration tests for DjangoLicenseRepository.

Repository coroutines are driven through ``async_to_sync`` so the ORM
runs on the test thread, inside the test's transaction.
"""

import asyncio
from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from django.db import DatabaseError

from core.domain.exceptions import (
    DeviceConflictError,
    LicenseNotFoundError,
    LicenseStoreUnavailableError,
)
from core.domain.value_objects import DeviceId, PhoneNumber
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.models import ActivationCode

PHONE = PhoneNumber("+221771234567")
DEVICE_A = DeviceId("device-a")
DEVICE_B = DeviceId("device-b")


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateUnclaimed:
    """Integration tests for create_unclaimed."""

    def test_create(self, license_repository, sample_license):
        """Test inserting a new unclaimed record."""
        stored, created = async_to_sync(license_repository.create_unclaimed)(sample_license)

        assert created is True
        assert stored.id == sample_license.id
        assert stored.phone == PHONE
        assert stored.used is False
        assert ActivationCode.objects.count() == 1

    def test_create_twice_is_idempotent(self, license_repository, sample_license):
        """Test a repeated delivery leaves one record and succeeds."""
        create = async_to_sync(license_repository.create_unclaimed)
        first, first_created = create(sample_license)
        duplicate = LicenseRecord.create(phone=PHONE, order_id="ORDER-2002")

        second, second_created = create(duplicate)

        assert first_created is True
        assert second_created is False
        assert second.id == first.id
        assert second.order_id == "ORDER-1001"
        assert ActivationCode.objects.filter(phone=PHONE.value).count() == 1

    def test_create_rejects_claimed_record(self, license_repository, sample_license):
        """Test claimed records cannot be inserted directly."""
        with pytest.raises(ValueError):
            async_to_sync(license_repository.create_unclaimed)(sample_license.claim(DEVICE_A))

    def test_database_failure_is_unavailable(self, license_repository, sample_license):
        """Test a database error is never reported as success or not found."""
        with mock.patch.object(
            ActivationCode.objects, "filter", side_effect=DatabaseError("down")
        ):
            with pytest.raises(LicenseStoreUnavailableError):
                async_to_sync(license_repository.create_unclaimed)(sample_license)


@pytest.mark.django_db
@pytest.mark.integration
class TestClaim:
    """Integration tests for the atomic claim."""

    def test_claim_unclaimed(self, license_repository, unclaimed_license):
        """Test the first device binds the license."""
        unclaimed_license()

        result = async_to_sync(license_repository.claim)(PHONE, DEVICE_A)

        assert result.newly_claimed is True
        assert result.record.used is True
        assert result.record.device_id == DEVICE_A
        assert result.record.used_at is not None
        row = ActivationCode.objects.get(phone=PHONE.value)
        assert row.used is True
        assert row.device_id == "device-a"

    def test_reclaim_same_device_keeps_used_at(self, license_repository, unclaimed_license):
        """Test re-activation from the bound device is idempotent."""
        unclaimed_license()
        claim = async_to_sync(license_repository.claim)
        first = claim(PHONE, DEVICE_A)

        again = claim(PHONE, DEVICE_A)

        assert again.newly_claimed is False
        assert again.record.device_id == DEVICE_A
        assert again.record.used_at == first.record.used_at

    def test_claim_other_device_conflicts(self, license_repository, unclaimed_license):
        """Test a second device is refused and the record is unchanged."""
        unclaimed_license()
        claim = async_to_sync(license_repository.claim)
        first = claim(PHONE, DEVICE_A)

        with pytest.raises(DeviceConflictError):
            claim(PHONE, DEVICE_B)

        row = ActivationCode.objects.get(phone=PHONE.value)
        assert row.device_id == "device-a"
        assert row.used_at == first.record.used_at

    def test_claim_unknown_phone(self, license_repository, db):
        """Test claiming a phone without a record."""
        with pytest.raises(LicenseNotFoundError):
            async_to_sync(license_repository.claim)(PHONE, DEVICE_A)

    def test_concurrent_claims_have_one_winner(self, license_repository, unclaimed_license):
        """
        Test two devices claiming one license.

        ``sync_to_async`` runs both claims on the same thread one after
        the other, so this checks the conditional update decides the
        winner rather than exercising a true database race.
        """
        unclaimed_license()

        async def race():
            return await asyncio.gather(
                license_repository.claim(PHONE, DEVICE_A),
                license_repository.claim(PHONE, DEVICE_B),
                return_exceptions=True,
            )

        outcomes = async_to_sync(race)()

        winners = [o for o in outcomes if not isinstance(o, Exception)]
        losers = [o for o in outcomes if isinstance(o, DeviceConflictError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert winners[0].newly_claimed is True
        row = ActivationCode.objects.get(phone=PHONE.value)
        assert row.device_id == str(winners[0].record.device_id)

    def test_database_failure_is_unavailable(self, license_repository, unclaimed_license):
        """Test a failing update surfaces as unavailable, not not-found."""
        unclaimed_license()
        with mock.patch.object(
            ActivationCode.objects, "filter", side_effect=DatabaseError("down")
        ):
            with pytest.raises(LicenseStoreUnavailableError):
                async_to_sync(license_repository.claim)(PHONE, DEVICE_A)


@pytest.mark.django_db
@pytest.mark.integration
class TestLookups:
    """Integration tests for lookups."""

    def test_find_by_phone(self, license_repository, unclaimed_license):
        """Test finding a record by canonical phone."""
        stored = unclaimed_license(phone="+221 77 123 45 67")

        found = async_to_sync(license_repository.find_by_phone)(PHONE)

        assert found is not None
        assert found.id == stored.id
        assert async_to_sync(license_repository.find_by_phone)(PhoneNumber("+33612345678")) is None

    def test_find_by_device_id(self, license_repository, unclaimed_license):
        """Test only claimed records are found by device."""
        unclaimed_license()
        find = async_to_sync(license_repository.find_by_device_id)
        assert find(DEVICE_A) is None

        async_to_sync(license_repository.claim)(PHONE, DEVICE_A)

        found = find(DEVICE_A)
        assert found is not None
        assert found.phone == PHONE
        assert find(DEVICE_B) is None
