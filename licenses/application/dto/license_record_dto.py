"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LicenseRecordDTO:
    """DTO for license record information."""

    id: uuid.UUID
    phone: str
    order_id: str
    customer_name: Optional[str]
    customer_email: Optional[str]
    used: bool
    used_at: Optional[datetime]
    created_at: datetime


@dataclass
class CreateLicenseResponseDTO:
    """DTO for create license response."""

    license: LicenseRecordDTO
    created: bool
    message: str
