"""
Unit tests for FingerprintProvider.
"""

import asyncio
import hashlib

from unittest import mock

import pytest

from client.infrastructure.fingerprint import (
    FALLBACK_PREFIX,
    FingerprintProvider,
    _hardware_node,
    _read_machine_id,
    collect_machine_signals,
)


@pytest.mark.asyncio
class TestFingerprintProvider:
    """Tests for FingerprintProvider."""

    async def test_derived_from_signals(self):
        """Test the fingerprint is a digest of the machine signals."""
        provider = FingerprintProvider(collector=lambda: ["Linux", "x86_64", "host"])

        value = await provider.get()

        assert value == hashlib.sha256("Linux\x1fx86_64\x1fhost".encode()).hexdigest()
        assert provider.is_degraded is False

    async def test_stable_across_instances(self):
        """Test the same machine yields the same fingerprint."""
        signals = ["Linux", "x86_64", "host", "machine-id"]

        first = await FingerprintProvider(collector=lambda: signals).get()
        second = await FingerprintProvider(collector=lambda: signals).get()

        assert first == second

    async def test_memoized(self):
        """Test signals are collected once per provider."""
        calls = []

        def collector():
            calls.append(1)
            return ["Linux"]

        provider = FingerprintProvider(collector=collector)
        values = await asyncio.gather(provider.get(), provider.get(), provider.get())

        assert len(set(values)) == 1
        assert len(calls) == 1

    async def test_fails_open_with_fallback(self, caplog):
        """Test a collection failure yields a flagged random identifier."""

        def broken():
            raise OSError("no signals")

        provider = FingerprintProvider(collector=broken)

        value = await provider.get()

        assert value.startswith(FALLBACK_PREFIX)
        assert provider.is_degraded is True
        assert await provider.get() == value
        assert "fallback" in caplog.text

    async def test_fallback_is_random_per_provider(self):
        """Test two failing providers do not collide."""

        def broken():
            raise RuntimeError("boom")

        first = await FingerprintProvider(collector=broken).get()
        second = await FingerprintProvider(collector=broken).get()

        assert first != second


class TestMachineSignals:
    """Tests for signal collection."""

    def test_signals_have_fixed_positions(self):
        """Test every signal is present, even when empty."""
        signals = collect_machine_signals()

        assert len(signals) == 5
        assert all(isinstance(s, str) for s in signals)

    def test_read_machine_id(self, tmp_path):
        """Test the first readable, non-empty id file wins."""
        empty = tmp_path / "empty"
        empty.write_text("\n")
        present = tmp_path / "machine-id"
        present.write_text("abc123\n")

        assert _read_machine_id([tmp_path / "missing", empty, present]) == "abc123"
        assert _read_machine_id([tmp_path / "missing"]) == ""

    def test_host_name_is_not_a_signal(self):
        """Test renaming the machine keeps the fingerprint."""
        with mock.patch("socket.gethostname", return_value="renamed-laptop"):
            renamed = collect_machine_signals()

        assert "renamed-laptop" not in renamed
        assert renamed == collect_machine_signals()

    def test_hardware_node_uses_real_mac(self):
        """Test a readable MAC address is part of the fingerprint."""
        with mock.patch("uuid.getnode", return_value=0x02FC00000001):
            assert _hardware_node() == "02fc00000001"

    def test_random_node_is_ignored(self):
        """Test the random per-process node is left out."""
        with mock.patch("uuid.getnode", side_effect=[0x1B2B3C4D5E6F, 0x13FFEEDDCCBB]):
            assert _hardware_node() == ""
            assert _hardware_node() == ""
