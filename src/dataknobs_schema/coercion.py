"""Type coercion rules used by the Type validator.

Coercion is one level deep and limited to a fixed table of rules, evaluated
in priority order:

1. the value already has the target type
2. integer target, text holding an integer
3. float target, text holding a float
4. text target, value with a textual representation
5. boolean target, text
6. otherwise, a type mismatch
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from .exceptions import CoercionError, TypeMismatchError
from .kinds import ValueKind, as_kind, python_type, type_name

_INTEGER_TEXT = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

TRUE_WORDS = frozenset({"t", "true", "yes", "y"})
FALSE_WORDS = frozenset({"f", "false", "no", "n"})

# Marks a rule that does not apply to the value/target pair
NO_MATCH: Any = object()


@dataclass(frozen=True)
class Target:
    """A resolved coercion target.

    Attributes:
        accepts: Type(s) a value may already have to pass unchanged
        primary: The type coerced values are converted to
        name: Readable name used in error messages
    """

    accepts: type | tuple[type, ...]
    primary: type
    name: str

    @classmethod
    def resolve(cls, target: type | ValueKind | str) -> Target:
        """Build a Target from a Python type, ValueKind or kind name."""
        if isinstance(target, (ValueKind, str)):
            kind = as_kind(target)
            accepts = python_type(kind)
            primary = accepts[0] if isinstance(accepts, tuple) else accepts
            return cls(accepts=accepts, primary=primary, name=kind.value)
        if not isinstance(target, type):
            raise TypeError(f"Type target must be a type or ValueKind, got {target!r}")
        return cls(accepts=target, primary=target, name=type_name(target))

    @property
    def is_boolean(self) -> bool:
        return issubclass(self.primary, (bool, np.bool_))

    @property
    def is_integer(self) -> bool:
        return issubclass(self.primary, (int, np.integer)) and not self.is_boolean

    @property
    def is_float(self) -> bool:
        return issubclass(self.primary, (float, np.floating))

    @property
    def is_text(self) -> bool:
        return issubclass(self.primary, str)


def has_text_form(value: Any) -> bool:
    """Check whether a value exposes its own textual representation.

    A value qualifies when its type overrides ``__str__`` or ``__repr__``;
    instances relying on ``object``'s defaults, and ``None``, do not.
    """
    if value is None:
        return False
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


class Coercer:
    """Applies the coercion rule table for one target type.

    Raises instead of returning sentinels: a ``CoercionError`` when text
    targets a numeric type but does not parse, a ``TypeMismatchError`` when
    no rule applies.
    """

    def __init__(self, strict_booleans: bool = False):
        """Initialize coercer.

        Args:
            strict_booleans: If True, text outside the recognised true/false
                words is rejected instead of coerced to False
        """
        self.strict_booleans = strict_booleans
        self.rules: list[Callable[[Any, Target], Any]] = [
            self._already_typed,
            self._text_to_integer,
            self._text_to_float,
            self._to_text,
            self._text_to_boolean,
        ]

    def coerce(self, value: Any, target: Target | type | ValueKind | str) -> Any:
        """Coerce a value to the target type.

        Args:
            value: Value to coerce
            target: Target type

        Returns:
            The value unchanged, or its converted form

        Raises:
            TypeMismatchError: If no rule converts the value
        """
        if not isinstance(target, Target):
            target = Target.resolve(target)

        for rule in self.rules:
            result = rule(value, target)
            if result is not NO_MATCH:
                return result

        raise TypeMismatchError(
            target.name,
            value,
            message=(
                f"type mismatch, expected a `{target.name}` value "
                f"or something convertible to a `{target.name}` value."
            ),
        )

    def _already_typed(self, value: Any, target: Target) -> Any:
        if not isinstance(value, target.accepts):
            return NO_MATCH
        # bool subclasses int, but booleans are not numbers here
        if isinstance(value, bool) and (target.is_integer or target.is_float):
            return NO_MATCH
        return value

    def _text_to_integer(self, value: Any, target: Target) -> Any:
        if not (target.is_integer and isinstance(value, str)):
            return NO_MATCH
        if not _INTEGER_TEXT.fullmatch(value):
            raise CoercionError(target.name, value)
        number = int(value)
        if issubclass(target.primary, np.integer):
            bounds = np.iinfo(target.primary)
            if not bounds.min <= number <= bounds.max:
                raise CoercionError(target.name, value)
        try:
            return target.primary(number)
        except (OverflowError, ValueError) as e:
            raise CoercionError(target.name, value, e) from e

    def _text_to_float(self, value: Any, target: Target) -> Any:
        if not (target.is_float and isinstance(value, str)):
            return NO_MATCH
        if not _FLOAT_TEXT.fullmatch(value):
            raise CoercionError(target.name, value)
        try:
            return target.primary(float(value))
        except (OverflowError, ValueError) as e:
            raise CoercionError(target.name, value, e) from e

    def _to_text(self, value: Any, target: Target) -> Any:
        if not (target.is_text and has_text_form(value)):
            return NO_MATCH
        return str(value)

    def _text_to_boolean(self, value: Any, target: Target) -> Any:
        if not (target.is_boolean and isinstance(value, str)):
            return NO_MATCH
        word = value.lower()
        if word in TRUE_WORDS:
            return target.primary(True)
        if self.strict_booleans and word not in FALSE_WORDS:
            raise CoercionError(target.name, value)
        return target.primary(False)
