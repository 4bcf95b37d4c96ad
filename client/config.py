"""
Client configuration.

Settings are read from the environment so the same build can point at
a local, staging or production activation service.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_REQUEST_TIMEOUT = 10.0


def default_cache_path() -> Path:
    """Per-user location of the activation cache."""
    return Path.home() / ".niyyah" / "activation.json"


@dataclass(frozen=True)
class ClientSettings:
    """Activation client settings."""

    api_url: str = DEFAULT_API_URL
    cache_path: Optional[Path] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        """Fill in derived defaults and validate."""
        if self.cache_path is None:
            object.__setattr__(self, "cache_path", default_cache_path())
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """
        Build settings from environment variables.

        Reads ``NIYYAH_API_URL``, ``NIYYAH_CACHE_PATH`` and
        ``NIYYAH_REQUEST_TIMEOUT``; unset variables keep their defaults.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            ClientSettings instance
        """
        env = os.environ if environ is None else environ
        cache_path = env.get("NIYYAH_CACHE_PATH")
        return cls(
            api_url=env.get("NIYYAH_API_URL", DEFAULT_API_URL).rstrip("/"),
            cache_path=Path(cache_path).expanduser() if cache_path else None,
            request_timeout=float(env.get("NIYYAH_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        )
