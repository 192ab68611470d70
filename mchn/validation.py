"""Validation utilities for commerce requests.

Problems with a request are collected into a ``ValidationResult`` rather than
raised one at a time, so every problem with a call can be reported together.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import RequestValidationError

BAD_REQUEST = 400


@dataclass
class ValidationError:
    """A validation error for a request field.

    Attributes:
        field: The name of the field or URL parameter that failed validation
        description: A description of the validation error
        code: The HTTP-style error code, 400 for client mistakes
        value: The invalid value (optional)
    """

    field: str
    description: str
    code: int = BAD_REQUEST
    value: Optional[Any] = None

    def __str__(self) -> str:
        """Return a human-readable representation of the error."""
        if self.value is not None:
            return f"{self.field}: {self.description} (got: {self.value!r})"
        return f"{self.field}: {self.description}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "code": self.code,
            "errorDescription": self.description,
        }


@dataclass
class ValidationResult:
    """The result of validating a request.

    Attributes:
        is_valid: Whether the request is valid
        errors: List of validation errors (empty if valid)
    """

    is_valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)

    def add_error(
        self,
        field: str,
        description: str,
        value: Optional[Any] = None,
        code: int = BAD_REQUEST,
    ) -> "ValidationResult":
        """Add a validation error.

        Args:
            field: The name of the field that failed validation
            description: A description of the validation error
            value: The invalid value (optional)
            code: Error code, defaults to 400

        Returns:
            self for method chaining
        """
        self.errors.append(
            ValidationError(field=field, description=description, code=code, value=value)
        )
        self.is_valid = False
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one.

        Args:
            other: Another ValidationResult to merge

        Returns:
            self for method chaining
        """
        self.errors.extend(other.errors)
        if not other.is_valid:
            self.is_valid = False
        return self

    def __str__(self) -> str:
        """Return a human-readable representation of the validation result."""
        if self.is_valid:
            return "Validation passed"
        error_strs = [str(e) for e in self.errors]
        return "Validation failed:\n  " + "\n  ".join(error_strs)

    def raise_if_invalid(self) -> None:
        """Raise if validation failed.

        Raises:
            RequestValidationError: If there are validation errors
        """
        if not self.is_valid:
            raise RequestValidationError(str(self))


def validate_present(
    value: Any,
    field_name: str,
    description: str,
    result: Optional[ValidationResult] = None,
) -> ValidationResult:
    """Validate that a value is neither missing nor empty.

    Args:
        value: The value to validate
        field_name: The name of the field being validated
        description: Message recorded when the value is missing
        result: An existing ValidationResult to add to (creates new if None)

    Returns:
        The ValidationResult (existing or new)
    """
    if result is None:
        result = ValidationResult()

    if not value:
        result.add_error(field=field_name, description=description, value=value)
    return result


def validate_id(
    value: Any,
    field_name: str,
    description: str,
    result: Optional[ValidationResult] = None,
) -> ValidationResult:
    """Validate that a value is a positive integer, or a string holding one.

    Args:
        value: The value to validate
        field_name: The name of the field being validated
        description: Message recorded when the value is invalid
        result: An existing ValidationResult to add to (creates new if None)

    Returns:
        The ValidationResult (existing or new)
    """
    if result is None:
        result = ValidationResult()

    if not _is_positive_int(value):
        result.add_error(field=field_name, description=description, value=value)
    return result


def _is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value) > 0
    return False
