"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from typing import Optional

from core.domain.exceptions import InvalidDeviceIdError, InvalidPhoneNumberError

# E.164 allows at most 15 digits; shorter than 6 is never a mobile number.
PHONE_MIN_DIGITS = 6
PHONE_MAX_DIGITS = 15
DEVICE_ID_MAX_LENGTH = 255

_NON_DIGITS = re.compile(r"[^0-9]")
_CANONICAL_PHONE = re.compile(r"\+[0-9]+")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class PhoneNumber(ValueObject):
    """
    Canonical phone number: ``+`` followed by digits only.

    Build it with ``PhoneNumber.normalize`` from user input;
    the constructor only accepts values that are already canonical.
    """

    value: str

    def __post_init__(self):
        """Validate canonical form."""
        if not self.value or not _CANONICAL_PHONE.fullmatch(self.value):
            raise InvalidPhoneNumberError(f"Invalid phone number: {self.value!r}")
        digits = self.value[1:]
        if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
            raise InvalidPhoneNumberError(f"Invalid phone number length: {self.value!r}")

    @classmethod
    def normalize(cls, raw: Optional[str]) -> "PhoneNumber":
        """
        Normalize user input into a canonical phone number.

        Every non-digit character is stripped and a single leading ``+``
        is added, so "+221 77 123 45 67", "221771234567" and
        "+221-77-123-45-67" all map to "+221771234567".

        Args:
            raw: Phone number as typed by the user

        Returns:
            PhoneNumber value object

        Raises:
            InvalidPhoneNumberError: If no usable digits remain
        """
        if raw is None or not str(raw).strip():
            raise InvalidPhoneNumberError()
        digits = _NON_DIGITS.sub("", str(raw))
        if not digits:
            raise InvalidPhoneNumberError(f"Invalid phone number: {raw!r}")
        return cls(f"+{digits}")

    def __str__(self) -> str:
        """Return phone number as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class DeviceId(ValueObject):
    """Device fingerprint value object."""

    value: str

    def __post_init__(self):
        """Validate device identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise InvalidDeviceIdError()
        if self.value != self.value.strip():
            raise InvalidDeviceIdError("Device identifier must not have surrounding whitespace")
        if len(self.value) > DEVICE_ID_MAX_LENGTH:
            raise InvalidDeviceIdError("Device identifier too long")

    @classmethod
    def parse(cls, raw: Optional[str]) -> "DeviceId":
        """Build a DeviceId from request input, trimming whitespace."""
        if raw is None:
            raise InvalidDeviceIdError()
        return cls(str(raw).strip())

    def __str__(self) -> str:
        """Return identifier as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class UserProfile(ValueObject):
    """Display profile derived from a license record."""

    phone: str
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def first_name(self) -> Optional[str]:
        """First whitespace-separated token of the name."""
        if not self.name or not self.name.strip():
            return None
        return self.name.split()[0]

    def to_dict(self) -> dict:
        """Serialize with the field names the clients expect."""
        return {
            "phone": self.phone,
            "name": self.name,
            "firstName": self.first_name,
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Rebuild a profile from its serialized form."""
        return cls(
            phone=data.get("phone") or "",
            name=data.get("name"),
            email=data.get("email"),
        )
