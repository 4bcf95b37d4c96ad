"""
JSON file adapter for the activation cache.
"""
import json
import logging
import os
from pathlib import Path

from asgiref.sync import sync_to_async

from client.domain.session_state import ActivationSnapshot
from client.ports.activation_cache import ActivationCache

logger = logging.getLogger(__name__)


class JsonFileActivationCache(ActivationCache):
    """
    Activation cache stored as a small JSON file.

    A missing or unreadable file reads as "not activated"; the session
    then asks the server, which is the authority anyway.
    """

    def __init__(self, path: Path):
        """Initialize cache with the file location."""
        self.path = Path(path)

    async def load(self) -> ActivationSnapshot:
        return await sync_to_async(self._load)()

    async def save(self, snapshot: ActivationSnapshot) -> None:
        await sync_to_async(self._save)(snapshot)

    async def clear(self) -> None:
        await sync_to_async(self._clear)()

    def _load(self) -> ActivationSnapshot:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return ActivationSnapshot.empty()
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable activation cache %s: %s", self.path, e)
            return ActivationSnapshot.empty()

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed activation cache %s", self.path)
            return ActivationSnapshot.empty()
        return ActivationSnapshot.from_dict(data)

    def _save(self, snapshot: ActivationSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f)
        # Readers never see a partially written file
        os.replace(tmp_path, self.path)

    def _clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
