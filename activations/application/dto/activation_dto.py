"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import UserProfile


@dataclass
class ActivationResultDTO:
    """DTO for a successful activation."""

    phone: str
    device_id: str
    activated_at: datetime
    profile: UserProfile
    already_activated: bool

    @property
    def message(self) -> str:
        if self.already_activated:
            return "Already activated on this device"
        return "Application activated successfully"


@dataclass
class ActivationStatusDTO:
    """DTO for a status check by phone number."""

    valid: bool
    profile: Optional[UserProfile]


@dataclass
class DeviceActivationDTO:
    """DTO for a status check by device fingerprint."""

    activated: bool
    phone: Optional[str] = None
    profile: Optional[UserProfile] = None
