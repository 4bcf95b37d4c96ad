"""
Activation cache port (interface).

The cache is advisory: it lets a known device skip the network on
startup, but the activation service stays the authority.
"""
from abc import ABC, abstractmethod

from client.domain.session_state import ActivationSnapshot


class ActivationCache(ABC):
    """Abstract local activation cache."""

    @abstractmethod
    async def load(self) -> ActivationSnapshot:
        """Return the cached snapshot, or an empty one."""
        pass

    @abstractmethod
    async def save(self, snapshot: ActivationSnapshot) -> None:
        """Replace the cached snapshot."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Forget any cached activation."""
        pass
