"""Validator base class with composable operators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import SchemaError
from .result import ValidationResult

if TYPE_CHECKING:
    from .combinators import And, Or

In = TypeVar("In")
Out = TypeVar("Out")


class Validator(ABC, Generic[In, Out]):
    """Base class for every validator and combinator.

    ``In`` is the logical input type and ``Out`` the type produced on
    success. Inputs are untyped at runtime, so ``validate`` accepts any
    value and checks its shape itself.
    """

    @abstractmethod
    def validate(self, value: Any) -> Out:
        """Validate a value.

        Args:
            value: Value to validate

        Returns:
            The validated, possibly converted, value

        Raises:
            SchemaError: If the value does not validate
        """

    def __call__(self, value: Any) -> Out:
        return self.validate(value)

    def check(self, value: Any) -> ValidationResult:
        """Validate a value without raising.

        Returns:
            ValidationResult holding the validated value or the failure
        """
        try:
            return ValidationResult.success(self.validate(value))
        except SchemaError as e:
            return ValidationResult.failure(value, e)

    def is_valid(self, value: Any) -> bool:
        return self.check(value).valid

    # Operands that are not validators are built with builders.schema()

    def __and__(self, other: Any) -> And:
        """Combine with AND: the output of this validator feeds ``other``."""
        from .builders import schema
        from .combinators import And

        return And(self, schema(other))

    def __rand__(self, other: Any) -> And:
        from .builders import schema
        from .combinators import And

        return And(schema(other), self)

    def __or__(self, other: Any) -> Or:
        """Combine with OR: ``other`` is tried when this validator fails."""
        from .builders import schema
        from .combinators import Or

        return Or(self, schema(other))

    def __ror__(self, other: Any) -> Or:
        from .builders import schema
        from .combinators import Or

        return Or(schema(other), self)
