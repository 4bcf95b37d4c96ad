"""
GetActivationStatusQuery.

Query to check whether a phone number holds a license usable on a device.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class GetActivationStatusQuery:
    """Query to get activation status by phone number."""

    phone: str
    device_id: Optional[str] = None
