"""
Fakes for activation client tests.
"""

import asyncio

from client.domain.session_state import ActivationSnapshot
from client.infrastructure.fingerprint import FingerprintProvider
from client.ports.activation_cache import ActivationCache
from client.ports.activation_gateway import ActivationGateway
from core.domain.exceptions import (
    DeviceConflictError,
    LicenseNotFoundError,
    LicenseStoreUnavailableError,
)
from core.domain.value_objects import UserProfile

DEVICE = "device-fingerprint-a"
PHONE = "+221771234567"
PROFILE = UserProfile(phone=PHONE, name="Awa Diop", email="awa@example.com")


class FakeGateway(ActivationGateway):
    """In-memory activation service keyed by phone number."""

    def __init__(self):
        self.bindings = {}
        self.licenses = {}
        self.offline = False
        self.calls = []

    def add_license(self, phone=PHONE, profile=PROFILE, bound_to=None):
        self.licenses[phone] = profile
        if bound_to:
            self.bindings[phone] = bound_to

    def _check_online(self):
        if self.offline:
            raise LicenseStoreUnavailableError("Connection error. Check your internet connection.")

    async def activate(self, phone, device_id):
        self.calls.append(("activate", phone, device_id))
        self._check_online()
        if phone not in self.licenses:
            raise LicenseNotFoundError()
        if self.bindings.setdefault(phone, device_id) != device_id:
            raise DeviceConflictError()
        return ActivationSnapshot(activated=True, phone=phone, profile=self.licenses[phone])

    async def check_status(self, phone, device_id=None):
        self.calls.append(("check_status", phone, device_id))
        self._check_online()
        if phone not in self.licenses:
            raise LicenseNotFoundError()
        bound = self.bindings.get(phone)
        if device_id and bound and bound != device_id:
            raise DeviceConflictError()
        return self.licenses[phone]

    async def check_device(self, device_id):
        self.calls.append(("check_device", device_id))
        self._check_online()
        for phone, bound in self.bindings.items():
            if bound == device_id:
                return ActivationSnapshot(
                    activated=True, phone=phone, profile=self.licenses[phone]
                )
        return ActivationSnapshot.empty()


class FakeCache(ActivationCache):
    """Activation cache held in memory."""

    def __init__(self, snapshot=None):
        self.snapshot = snapshot or ActivationSnapshot.empty()
        self.writes = 0

    async def load(self):
        return self.snapshot

    async def save(self, snapshot):
        self.writes += 1
        self.snapshot = snapshot

    async def clear(self):
        self.writes += 1
        self.snapshot = ActivationSnapshot.empty()


class ReadOnlyCache(FakeCache):
    """Cache whose writes fail like a read-only home directory."""

    def __init__(self, snapshot=None, failures=1):
        super().__init__(snapshot)
        self.failures = failures

    async def save(self, snapshot):
        if self.failures:
            self.failures -= 1
            raise PermissionError("read-only file system")
        await super().save(snapshot)


class SlowGateway(FakeGateway):
    """Gateway whose device check waits until released."""

    def __init__(self):
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def check_device(self, device_id):
        self.entered.set()
        await self.release.wait()
        return await super().check_device(device_id)


class FixedFingerprintProvider(FingerprintProvider):
    """Fingerprint provider that always reports DEVICE."""

    async def get(self):
        return DEVICE
