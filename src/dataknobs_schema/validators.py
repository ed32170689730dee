"""Leaf validator implementations.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable
from typing import Any, cast

from .base import Validator
from .coercion import Coercer, Target
from .exceptions import (
    EmptyResultError,
    MembershipError,
    PatternCompileError,
    PatternMismatchError,
    PredicateError,
    TransformError,
    TypeMismatchError,
)
from .kinds import ValueKind, kind_of, type_name
from .settings import get_settings

logger = logging.getLogger(__name__)


class Type(Validator[Any, Any]):
    """Value must have, or be coercible to, a target type.

    Example:
        ```python
        Type(int).validate("4")      # 4
        Type(str).validate(4)        # "4"
        Type(bool).validate("Yes")   # True
        ```
    """

    def __init__(self, target: type | ValueKind | str, strict_booleans: bool | None = None):
        """Initialize type validator.

        Args:
            target: Python type, ValueKind or kind name (e.g. "integer")
            strict_booleans: Reject unrecognised boolean text. Defaults to
                the current settings.
        """
        if strict_booleans is None:
            strict_booleans = get_settings().strict_booleans
        self.target = Target.resolve(target)
        self.coercer = Coercer(strict_booleans=strict_booleans)

    def validate(self, value: Any) -> Any:
        return self.coercer.coerce(value, self.target)


class Predicate(Validator[Any, Any]):
    """Value must satisfy a boolean test. The value is returned unchanged."""

    def __init__(
        self,
        test: Callable[[Any], Any],
        message: str | None = None,
        accepts: type | tuple[type, ...] | None = None,
    ):
        """Initialize predicate validator.

        Args:
            test: Callable returning a truthy value for valid input
            message: Error message used when the test returns false
            accepts: Optional type(s) the value must have before testing
        """
        self.test = test
        self.accepts = accepts
        if message is None:
            name = getattr(test, "__name__", "<lambda>")
            message = (
                "predicate failed to validate"
                if name == "<lambda>"
                else f"predicate '{name}' failed to validate"
            )
        self.message = message

    @classmethod
    def attribute(cls, name: str, message: str | None = None) -> Predicate:
        """Build a predicate reading a boolean attribute of the value.

        Zero-argument methods are called, so ``Predicate.attribute("is_integer")``
        accepts ``4.0`` and rejects ``4.5``.
        """

        def read(value: Any) -> Any:
            result = getattr(value, name)
            return result() if callable(result) else result

        return cls(read, message=message or f"attribute '{name}' is not true")

    def validate(self, value: Any) -> Any:
        if self.accepts is not None and not isinstance(value, self.accepts):
            raise TypeMismatchError(type_name(self.accepts), value)
        try:
            passed = bool(self.test(value))
        except Exception as e:
            raise PredicateError(f"{self.message}: test raised", e) from e
        if not passed:
            raise PredicateError(self.message)
        return value


class Membership(Validator[Any, Any]):
    """Value, or every element of a sequence, must be in an allowed set."""

    def __init__(self, values: Iterable[Any]):
        """Initialize membership validator.

        Args:
            values: Allowed values (must be hashable)
        """
        self.allowed = frozenset(values)
        self.allowed_str = ", ".join(sorted(repr(v) for v in self.allowed))
        # True == 1, so booleans are only matched against boolean members
        self._booleans = frozenset(v for v in self.allowed if kind_of(v) is ValueKind.BOOLEAN)
        self._others = self.allowed - self._booleans

    def contains(self, value: Any) -> bool:
        members = self._booleans if kind_of(value) is ValueKind.BOOLEAN else self._others
        try:
            return value in members
        except TypeError:
            # Unhashable values can never be members
            return False

    def validate(self, value: Any) -> Any:
        if self.contains(value):
            return value
        if kind_of(value) is ValueKind.SEQUENCE:
            return self.validate_many(value)
        raise MembershipError(f"{value!r} is not one of ({self.allowed_str})", self.allowed)

    def validate_many(self, values: Any) -> Any:
        """Validate a sequence whose elements must all be allowed.

        Returns:
            The sequence, unchanged
        """
        if not all(self.contains(v) for v in values):
            raise MembershipError(
                f"expected every element to be one of ({self.allowed_str})",
                self.allowed,
            )
        return values


class Pattern(Validator[str, str]):
    """Text must contain a match for a regular expression.

    The pattern is searched anywhere in the text; anchor it with ``^...$``
    to require a full match. Compilation happens on first use and is
    guarded so that concurrent first calls compile once.
    """

    def __init__(self, pattern: str, flags: int = 0):
        """Initialize pattern validator.

        Args:
            pattern: Regular expression source
            flags: Flags passed to ``re.compile``
        """
        self.pattern = pattern
        self.flags = flags
        self._regex: re.Pattern[str] | None = None
        self._compile_error: re.error | None = None
        self._lock = threading.Lock()

    @property
    def regex(self) -> re.Pattern[str]:
        """The compiled expression.

        Raises:
            PatternCompileError: If the pattern does not compile
        """
        if self._regex is None and self._compile_error is None:
            with self._lock:
                if self._regex is None and self._compile_error is None:
                    try:
                        self._regex = re.compile(self.pattern, self.flags)
                        logger.debug(f"Compiled pattern '{self.pattern}'")
                    except re.error as e:
                        self._compile_error = e
        if self._compile_error is not None:
            raise PatternCompileError(self.pattern, self._compile_error)
        return cast("re.Pattern[str]", self._regex)

    def validate(self, value: Any) -> str:
        if not isinstance(value, str):
            raise TypeMismatchError("str", value)
        if self.regex.search(value) is None:
            raise PatternMismatchError(value, self.pattern)
        return value


class Transform(Validator[Any, Any]):
    """Converts a value with a function that may fail."""

    def __init__(
        self,
        func: Callable[[Any], Any],
        allow_empty: bool = False,
        accepts: type | tuple[type, ...] | None = None,
    ):
        """Initialize transform validator.

        Args:
            func: Conversion function; raising means the value is invalid
            allow_empty: If False, a ``None`` result is a failure
            accepts: Optional type(s) the value must have before converting
        """
        self.func = func
        self.allow_empty = allow_empty
        self.accepts = accepts

    def validate(self, value: Any) -> Any:
        if self.accepts is not None and not isinstance(value, self.accepts):
            raise TypeMismatchError(type_name(self.accepts), value)
        try:
            result = self.func(value)
        except Exception as e:
            raise TransformError("transform failed to validate.", e) from e
        if result is None and not self.allow_empty:
            raise EmptyResultError()
        return result


class Guard(Validator[Any, Any]):
    """Runs a conversion function as a check, returning the original value.

    Useful when a parser already encodes the rules: ``Guard(uuid.UUID)``
    accepts any string that parses as a UUID and keeps it as a string.
    """

    def __init__(self, func: Callable[[Any], Any]):
        self.func = func

    def validate(self, value: Any) -> Any:
        try:
            self.func(value)
        except Exception as e:
            raise TransformError("guard failed to validate.", e) from e
        return value


class Always(Validator[Any, Any]):
    """Accepts every value unchanged, or rejects every value."""

    def __init__(self, valid: bool = True):
        self.valid = valid

    def validate(self, value: Any) -> Any:
        if not self.valid:
            raise PredicateError("value rejected unconditionally")
        return value


__all__ = [
    "Type",
    "Predicate",
    "Membership",
    "Pattern",
    "Transform",
    "Guard",
    "Always",
]
