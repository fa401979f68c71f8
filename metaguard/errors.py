"""
Guard error taxonomy.

Every rejection raised by the validation pipeline is an InvalidParameterError
carrying a fixed status classification (406). Exceptions raised by formatters,
validators or the downstream handler are never wrapped into these types.
"""

from typing import Any, Optional


class ValidationError(ValueError):
    """Raised when an input cannot be accepted in its declared shape."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


class InvalidParameterError(ValidationError):
    """
    A declared request parameter was missing or invalid.

    Attributes:
        message: Client-facing diagnostic (exact wording is part of the API)
        field: Parameter name
        source: Where the parameter was read from (path, query, ...)
        status: HTTP status used by the error envelope
    """

    status = 406
    code = "INVALID_PARAMS"

    def __init__(
        self,
        message: str,
        field: str = None,
        source: str = None,
        received_value: Any = None,
    ):
        super().__init__(message, field=field, received_value=received_value)
        self.message = message
        self.source = source

    def to_dict(self) -> dict:
        """Convert to dict for the JSON error envelope."""
        error = {"code": self.code, "message": self.message}
        if self.field:
            error["field"] = self.field
        if self.source:
            error["source"] = self.source
        return error


class MissingRequiredParameter(InvalidParameterError):
    """A required parameter was absent and had no default."""

    def __init__(self, field: str, source: str):
        super().__init__(
            f"Missing required param '{field}' in {source}",
            field=field,
            source=source,
        )


class TypeCoercionFailure(InvalidParameterError):
    """The raw value could not be converted to the declared type."""

    def __init__(self, field: str, source: str, expected_type: str, received_value: Any = None):
        super().__init__(
            f"Invalid param '{field}' in {source}: {expected_type} required",
            field=field,
            source=source,
            received_value=received_value,
        )
        self.expected_type = expected_type


class ConstraintViolation(InvalidParameterError):
    """A coerced value broke a range, length or enum constraint."""

    def __init__(
        self,
        field: str,
        source: str,
        constraint: str,
        reason: str,
        received_value: Any = None,
    ):
        super().__init__(
            f"Invalid param '{field}' in {source}: {reason}",
            field=field,
            source=source,
            received_value=received_value,
        )
        self.constraint = constraint
        self.reason = reason


class CustomValidationFailure(InvalidParameterError):
    """A custom validator rejected the value."""

    def __init__(
        self,
        field: str,
        source: str,
        message: Optional[str] = None,
        received_value: Any = None,
    ):
        super().__init__(
            message if message is not None else f"Invalid param '{field}' in {source}",
            field=field,
            source=source,
            received_value=received_value,
        )
