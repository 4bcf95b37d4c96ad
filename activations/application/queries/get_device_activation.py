"""
GetDeviceActivationQuery.

Query to restore a session from a device fingerprint alone.
"""
from dataclasses import dataclass


@dataclass
class GetDeviceActivationQuery:
    """Query to get the activation bound to a device."""

    device_id: str
