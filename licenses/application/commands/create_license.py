"""
CreateLicenseCommand.

Command to register an unclaimed license for a buyer's phone number.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """Command to create an unclaimed license record."""

    phone: str
    order_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
