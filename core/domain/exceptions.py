"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. The same classes are raised
server-side by the activation service and client-side by the
activation gateway, so callers can tell the four failure families apart:

- ValidationException: bad input, the user can correct it
- LicenseNotFoundError: no license for this phone number
- DeviceConflictError: license bound to another device
- LicenseStoreUnavailableError: infrastructure failure, try again
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationException(DomainException):
    """Base exception for malformed or missing input."""

    def __init__(self, message: str = "Invalid input", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidPhoneNumberError(ValidationException):
    """Raised when a phone number is missing or malformed."""

    def __init__(self, message: str = "A valid phone number is required"):
        super().__init__(message, code="INVALID_PHONE_NUMBER")


class InvalidDeviceIdError(ValidationException):
    """Raised when a device identifier is missing or malformed."""

    def __init__(self, message: str = "A valid device identifier is required"):
        super().__init__(message, code="INVALID_DEVICE_ID")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when no license exists for a phone number."""

    def __init__(self, message: str = "No license found for this phone number."):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DeviceConflictError(LicenseException):
    """Raised when a license is already bound to another device."""

    def __init__(self, message: str = "This number is already activated on another device."):
        super().__init__(message, code="DEVICE_CONFLICT")


class LicenseStoreUnavailableError(DomainException):
    """Raised when the license store is unreachable or misconfigured."""

    def __init__(self, message: str = "Activation service unavailable. Please try again."):
        super().__init__(message, code="SERVICE_UNAVAILABLE")


class InvalidAdminKeyError(DomainException):
    """Raised when an administrative key is missing or wrong."""

    def __init__(self, message: str = "Invalid admin key"):
        super().__init__(message, code="INVALID_ADMIN_KEY")
