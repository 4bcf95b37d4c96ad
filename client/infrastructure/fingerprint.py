"""
Device fingerprint provider.

Derives a stable identifier from durable machine signals, so it
survives a wiped activation cache. When the signals cannot be read the
provider fails open with a random identifier and flags itself as
degraded: such a device has to re-activate after losing its cache.
"""
import asyncio
import hashlib
import logging
import platform
import secrets
import uuid
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from asgiref.sync import sync_to_async

logger = logging.getLogger(__name__)

MACHINE_ID_PATHS = (
    Path("/etc/machine-id"),
    Path("/var/lib/dbus/machine-id"),
)

FALLBACK_PREFIX = "fallback_"


def _read_machine_id(paths: Sequence[Path] = MACHINE_ID_PATHS) -> str:
    for path in paths:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if value:
            return value
    return ""


def _hardware_node() -> str:
    node = uuid.getnode()
    # Multicast bit set: no MAC was readable and the value is random per process
    if (node >> 40) & 1:
        return ""
    return format(node, "012x")


def collect_machine_signals() -> List[str]:
    """
    Read the signals the fingerprint is derived from.

    Only values that stay fixed across reboots and renames are used;
    the host name is not one of them.

    Returns:
        Ordered list of signal strings; empty entries are kept so the
        position of every signal stays fixed
    """
    return [
        platform.system(),
        platform.machine(),
        platform.processor(),
        _hardware_node(),
        _read_machine_id(),
    ]


class FingerprintProvider:
    """
    Memoized device fingerprint.

    One instance is owned by the activation session; the first call to
    ``get`` computes the value under a lock, later calls reuse it.
    """

    def __init__(self, collector: Optional[Callable[[], Iterable[str]]] = None):
        """
        Initialize provider.

        Args:
            collector: Callable returning the machine signals
                (default: ``collect_machine_signals``)
        """
        self._collector = collector or collect_machine_signals
        self._lock = asyncio.Lock()
        self._value: Optional[str] = None
        self._degraded = False

    @property
    def is_degraded(self) -> bool:
        """True when the fingerprint is a random fallback."""
        return self._degraded

    async def get(self) -> str:
        """
        Get this device's fingerprint.

        Returns:
            Hex SHA-256 digest of the machine signals, or a
            ``fallback_`` identifier if they could not be read
        """
        if self._value is not None:
            return self._value

        async with self._lock:
            if self._value is None:
                self._value = await self._compute()
        return self._value

    async def _compute(self) -> str:
        try:
            signals = await sync_to_async(lambda: list(self._collector()))()
        except Exception as e:  # pylint: disable=broad-exception-caught
            fallback = f"{FALLBACK_PREFIX}{secrets.token_hex(16)}"
            self._degraded = True
            logger.warning(
                "Device fingerprint unavailable, using random fallback identifier: %s",
                e,
                extra={"fingerprint_degraded": True},
            )
            return fallback

        digest = hashlib.sha256("\x1f".join(signals).encode("utf-8")).hexdigest()
        logger.debug("Device fingerprint computed")
        return digest
