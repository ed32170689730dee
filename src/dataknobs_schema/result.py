"""Validation result types for callers that prefer values over exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import SchemaError


@dataclass
class ValidationResult:
    """Non-raising view of a single validation.

    ``Validator.check()`` returns one of these instead of raising, so the
    outcome can be inspected, logged or collected.
    """

    valid: bool
    value: Any  # The validated value on success, the original input on failure
    error: SchemaError | None = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @property
    def errors(self) -> list[str]:
        """Messages of the failure and every nested cause, outermost first."""
        if self.error is None:
            return []
        return [error.message for error in self.error.walk()]

    def unwrap(self) -> Any:
        """Return the validated value, or raise the stored error.

        Raises:
            SchemaError: If the validation failed
        """
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated value

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, value: Any, error: SchemaError) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The value that failed validation
            error: The failure raised by the validator

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, error=error)
