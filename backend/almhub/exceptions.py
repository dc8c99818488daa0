"""Domain exceptions carrying user-ready messages and stable error codes."""

from __future__ import annotations


class BusinessLogicException(Exception):
    """Base class for errors that map onto a client-facing API response."""

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class RecordNotFoundException(BusinessLogicException):
    """Raised when no record exists under the requested key."""

    def __init__(self, resource_type: str, identifier: str, attribute: str = "key") -> None:
        self.identifier = identifier
        message = f"No {resource_type} with {attribute} '{identifier}' has been found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class RecordExistsException(BusinessLogicException):
    """Raised when a key is already taken by another record."""

    def __init__(self, resource_type: str, identifier: str) -> None:
        self.identifier = identifier
        message = f"{resource_type} with key '{identifier}' already exists"
        super().__init__(message, error_code="RECORD_EXISTS")


class ValidationException(BusinessLogicException):
    """Raised when a request payload fails validation."""

    def __init__(self, message: str, error_code: str = "VALIDATION_FAILED") -> None:
        super().__init__(message, error_code=error_code)


class MissingParameterException(ValidationException):
    """Raised when a mandatory request parameter is absent or empty."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"The '{name}' parameter is missing", error_code="MISSING_PARAMETER"
        )


class InvalidParameterException(ValidationException):
    """Raised when a request parameter exceeds its allowed length."""

    def __init__(self, name: str, length: int, max_length: int) -> None:
        self.name = name
        message = (
            f"'{name}' length ({length}) is longer than the maximum authorized "
            f"({max_length})"
        )
        super().__init__(message, error_code="INVALID_PARAMETER")


class AuthenticationException(BusinessLogicException):
    """Raised when a request carries no usable API token."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="AUTHENTICATION_REQUIRED")


class AuthorizationException(BusinessLogicException):
    """Raised when the authenticated actor lacks the required role."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="PERMISSION_DENIED")
