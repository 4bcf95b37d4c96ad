"""
Activation session state.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.domain.value_objects import UserProfile


class SessionState(Enum):
    """Lifecycle of an activation session."""

    INITIALIZING = "initializing"
    ACTIVATED = "activated"
    NOT_ACTIVATED = "not_activated"


@dataclass(frozen=True)
class ActivationSnapshot:
    """
    What is known about this device's activation at one point in time.

    Used both for the server's answer and for the local cache content.
    """

    activated: bool
    phone: Optional[str] = None
    profile: Optional[UserProfile] = None

    @classmethod
    def empty(cls) -> "ActivationSnapshot":
        """Snapshot of a device with no known activation."""
        return cls(activated=False)

    @property
    def is_usable(self) -> bool:
        """A cached activation is only trusted when it names a phone."""
        return self.activated and bool(self.phone)

    def to_dict(self) -> dict:
        """Serialize for local storage."""
        return {
            "activated": self.activated,
            "phone": self.phone,
            "profile": self.profile.to_dict() if self.profile else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActivationSnapshot":
        """Rebuild a snapshot from local storage or a server response."""
        profile = data.get("profile")
        return cls(
            activated=bool(data.get("activated")),
            phone=data.get("phone") or None,
            profile=UserProfile.from_dict(profile) if isinstance(profile, dict) else None,
        )


@dataclass(frozen=True)
class ActivationAttempt:
    """Outcome of a user-driven activation, ready to show in the UI."""

    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
