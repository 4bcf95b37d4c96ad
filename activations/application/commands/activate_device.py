"""
ActivateDeviceCommand.

Command to bind the license of a phone number to a device.
"""

from dataclasses import dataclass


@dataclass
class ActivateDeviceCommand:
    """Command to activate a license on a device."""

    phone: str
    device_id: str
