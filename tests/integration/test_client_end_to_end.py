"""
End-to-end tests: the activation client against the real API.

The client's HTTP gateway is given DRF's ``RequestsClient``, so every
call goes through the full Django stack in-process.
"""

import pytest
from asgiref.sync import async_to_sync
from rest_framework.test import RequestsClient

from client.application.session import ActivationSession
from client.config import ClientSettings
from client.domain.session_state import SessionState
from client.factory import create_session
from client.infrastructure.file_cache import JsonFileActivationCache
from client.infrastructure.fingerprint import FingerprintProvider
from client.infrastructure.http_gateway import HttpActivationGateway

BASE_URL = "http://testserver"


def make_session(tmp_path, device):
    """Session for one simulated device with its own cache file."""
    return ActivationSession(
        gateway=HttpActivationGateway(BASE_URL, session=RequestsClient()),
        cache=JsonFileActivationCache(tmp_path / f"{device}.json"),
        fingerprints=FingerprintProvider(collector=lambda: [device]),
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestClientEndToEnd:
    """End-to-end tests for the activation flow."""

    def test_activate_then_conflict_on_second_device(self, tmp_path, unclaimed_license):
        """Test one license cannot be activated on two devices."""
        unclaimed_license(name="Awa Diop")
        phone_a = make_session(tmp_path, "device-a")
        phone_b = make_session(tmp_path, "device-b")

        async def scenario():
            await phone_a.start()
            await phone_b.start()
            return await phone_a.activate("+221 77 123 45 67"), await phone_b.activate(
                "221771234567"
            )

        first, second = async_to_sync(scenario)()

        assert first.success is True
        assert phone_a.is_activated is True
        assert phone_a.user_profile.first_name == "Awa"
        assert second.success is False
        assert "already activated on another device" in second.error
        assert phone_b.state is SessionState.NOT_ACTIVATED

    def test_cleared_cache_is_restored_from_server(self, tmp_path, unclaimed_license):
        """Test a device that lost its cache is recognised by fingerprint."""
        unclaimed_license(name="Awa Diop")
        cache_path = tmp_path / "device-a.json"

        async def activate_once():
            session = make_session(tmp_path, "device-a")
            await session.start()
            return await session.activate("221771234567")

        assert async_to_sync(activate_once)().success is True
        cache_path.unlink()

        reinstalled = make_session(tmp_path, "device-a")
        state = async_to_sync(reinstalled.start)()

        assert state is SessionState.ACTIVATED
        assert reinstalled.phone_number == "+221771234567"
        assert cache_path.exists()

    def test_unknown_device_is_not_activated(self, tmp_path, db):
        """Test a new device without license starts unactivated."""
        session = make_session(tmp_path, "device-new")

        assert async_to_sync(session.start)() is SessionState.NOT_ACTIVATED

    def test_unknown_phone_message(self, tmp_path, db):
        """Test the server message reaches the client unchanged."""
        session = make_session(tmp_path, "device-a")

        async def scenario():
            await session.start()
            return await session.activate("221771234567")

        attempt = async_to_sync(scenario)()

        assert attempt.success is False
        assert attempt.error == "No license found for this phone number."
        assert attempt.code == "LICENSE_NOT_FOUND"

    def test_factory_session_activates(self, tmp_path, unclaimed_license):
        """Test a session built by create_session works against the API."""
        unclaimed_license()
        settings = ClientSettings(
            api_url=BASE_URL, cache_path=tmp_path / "activation.json", request_timeout=5.0
        )
        session = create_session(settings, http_session=RequestsClient())

        async def scenario():
            await session.start()
            return await session.activate("+221771234567")

        attempt = async_to_sync(scenario)()

        assert attempt.success is True
        assert session.is_activated is True
        assert (tmp_path / "activation.json").exists()
