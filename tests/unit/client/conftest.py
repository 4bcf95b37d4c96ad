"""
Fixtures for activation client tests.
"""

import pytest

from client.application.session import ActivationSession

from client_fakes import FakeCache, FakeGateway, FixedFingerprintProvider


@pytest.fixture
def gateway():
    """Fixture for a fake activation service."""
    return FakeGateway()


@pytest.fixture
def cache():
    """Fixture for an empty in-memory cache."""
    return FakeCache()


@pytest.fixture
def fingerprints():
    """Fixture for a fingerprint provider that always yields DEVICE."""
    return FixedFingerprintProvider()


@pytest.fixture
def session(gateway, cache, fingerprints):
    """Fixture for an ActivationSession wired to fakes."""
    return ActivationSession(gateway=gateway, cache=cache, fingerprints=fingerprints)
