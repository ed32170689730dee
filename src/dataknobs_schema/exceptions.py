"""Exception hierarchy for schema validation failures.

Every failure raised by a validator is a ``SchemaError``. A failure carries a
human-readable message, the ordered causes that produced it, and an optional
context dictionary with structured details (key names, expected types,
allowed values).

Example:
    ```python
    from dataknobs_schema import DictSchema, Predicate, SchemaError

    schema = DictSchema({"age": Predicate(lambda age: 18 <= age <= 99)})

    try:
        schema.validate({"age": 8})
    except SchemaError as e:
        logger.error(f"Error: {e}")
        for nested in e.walk():
            logger.error(f"  {type(nested).__name__}: {nested.message}")
    ```
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeVar

E = TypeVar("E", bound="SchemaError")


def describe(error: BaseException) -> str:
    """Get the human-readable description of any error.

    ``SchemaError`` instances describe themselves recursively; other
    exceptions fall back to their string form, or their type name when
    that is empty.
    """
    text = str(error)
    return text if text else type(error).__name__


class SchemaError(Exception):
    """Base exception for all validation failures.

    Attributes:
        message: The failure message at this level
        causes: Ordered underlying errors (possibly empty)
        context: Dictionary containing structured failure details
        details: Alias for context

    Args:
        message: Human-readable error message
        *causes: Underlying errors, in the order they occurred
        context: Optional dictionary with failure context
    """

    def __init__(
        self,
        message: str,
        *causes: BaseException,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.causes: tuple[BaseException, ...] = causes
        self.context = context or {}
        self.details = self.context
        if causes:
            self.__cause__ = causes[0]

    def __str__(self) -> str:
        if not self.causes:
            return self.message
        nested = ", ".join(describe(cause) for cause in self.causes)
        return f"{self.message} ({nested})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, causes={len(self.causes)})"

    def walk(self) -> Iterator[SchemaError]:
        """Iterate over this error and every nested SchemaError, depth-first."""
        yield self
        for cause in self.causes:
            if isinstance(cause, SchemaError):
                yield from cause.walk()

    def find(self, kind: type[E]) -> E | None:
        """Return the first error in the chain that is an instance of ``kind``."""
        for error in self.walk():
            if isinstance(error, kind):
                return error
        return None


class TypeMismatchError(SchemaError):
    """Raised when a value does not have (and cannot be given) the expected type."""

    def __init__(self, expected: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"type mismatch, expected a `{expected}` value.",
            context={"expected": expected, "actual": type(value).__name__},
        )
        self.expected = expected


class CoercionError(TypeMismatchError):
    """Raised when text targets a type but cannot be converted to it."""

    def __init__(self, expected: str, value: Any, reason: BaseException | None = None):
        super().__init__(
            expected,
            value,
            message=f"cannot coerce {value!r} to a `{expected}` value.",
        )
        if reason is not None:
            self.causes = (reason,)
            self.__cause__ = reason


class PredicateError(SchemaError):
    """Raised when a predicate returns false or raises."""


class PatternMismatchError(SchemaError):
    """Raised when text contains no match for a pattern."""

    def __init__(self, text: str, pattern: str):
        super().__init__(
            f"'{text}' does not match pattern '{pattern}'",
            context={"pattern": pattern},
        )
        self.pattern = pattern


class PatternCompileError(SchemaError):
    """Raised when a pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: BaseException):
        super().__init__(
            f"pattern '{pattern}' failed to compile.",
            reason,
            context={"pattern": pattern},
        )
        self.pattern = pattern


class MembershipError(SchemaError):
    """Raised when a value, or an element of a sequence, is outside the allowed set."""

    def __init__(self, message: str, allowed: frozenset[Any]):
        super().__init__(message, context={"allowed": allowed})
        self.allowed = allowed


class MissingKeyError(SchemaError):
    """Raised when a required key is absent from a mapping."""

    def __init__(self, key: str):
        super().__init__(f"missing key '{key}'", context={"key": key})
        self.key = key


class UnexpectedKeysError(SchemaError):
    """Raised when a mapping holds keys the schema does not know about."""

    def __init__(self, keys: list[Any]):
        if len(keys) == 1:
            message = f"unexpected key '{keys[0]}'."
        else:
            message = "unexpected keys " + ", ".join(f"'{key}'" for key in keys)
        super().__init__(message, context={"keys": keys})
        self.keys = keys


class ForbiddenKeyError(SchemaError):
    """Raised when a forbidden key's value matches its paired validator."""

    def __init__(self, key: str):
        super().__init__(f"positive match for forbidden key '{key}'", context={"key": key})
        self.key = key


class KeyValidationError(SchemaError):
    """Raised when the value stored under a key fails validation."""

    def __init__(self, key: str, cause: BaseException):
        super().__init__(f"validation failed for key '{key}'.", cause, context={"key": key})
        self.key = key


class StageError(SchemaError):
    """Raised when one stage of a sequential combination fails."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(
            f"the {stage} stage failed to validate.",
            cause,
            context={"stage": stage},
        )
        self.stage = stage


class AlternativeError(SchemaError):
    """Raised when both branches of an alternative fail."""

    def __init__(self, first: BaseException, second: BaseException):
        super().__init__("both alternatives failed to validate.", first, second)


class TransformError(SchemaError):
    """Raised when a conversion function raises."""


class EmptyResultError(SchemaError):
    """Raised when a conversion function produces no result."""

    def __init__(self) -> None:
        super().__init__("schema result was empty")


class ConfigurationError(Exception):
    """Raised when settings are invalid or cannot be loaded.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown setting",
            context={"setting": "strict_bools", "available": ["strict_booleans"]}
        )
        ```
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}
        self.details = self.context


__all__ = [
    "SchemaError",
    "TypeMismatchError",
    "CoercionError",
    "PredicateError",
    "PatternMismatchError",
    "PatternCompileError",
    "MembershipError",
    "MissingKeyError",
    "UnexpectedKeysError",
    "ForbiddenKeyError",
    "KeyValidationError",
    "StageError",
    "AlternativeError",
    "TransformError",
    "EmptyResultError",
    "ConfigurationError",
    "describe",
]
