"""Combinators built from other validators.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .base import Validator
from .exceptions import AlternativeError, SchemaError, StageError, TypeMismatchError
from .kinds import ValueKind, kind_of, type_name
from .settings import get_settings
from .validators import Membership

logger = logging.getLogger(__name__)


class And(Validator[Any, Any]):
    """Sequential composition: the first validator's output feeds the second.

    Fails at the first stage that fails, without retrying.
    """

    def __init__(self, first: Validator[Any, Any], second: Validator[Any, Any]):
        """Initialize sequential combinator.

        Args:
            first: Validator run on the input
            second: Validator run on the first validator's output
        """
        self.first = first
        self.second = second

    def validate(self, value: Any) -> Any:
        try:
            intermediate = self.first.validate(value)
        except SchemaError as e:
            raise StageError("first", e) from e

        try:
            return self.second.validate(intermediate)
        except SchemaError as e:
            raise StageError("second", e) from e


class Or(Validator[Any, Any]):
    """Alternative composition: the first validator that succeeds wins.

    When both fail, the failure carries both underlying errors, in order.
    """

    def __init__(self, first: Validator[Any, Any], second: Validator[Any, Any]):
        self.first = first
        self.second = second
        self.log_failures = get_settings().log_failures

    def validate(self, value: Any) -> Any:
        try:
            return self.first.validate(value)
        except SchemaError as first_error:
            try:
                return self.second.validate(value)
            except SchemaError as second_error:
                if self.log_failures:
                    logger.debug(f"Both alternatives failed: {first_error}; {second_error}")
                raise AlternativeError(first_error, second_error) from second_error


class ListOf(Validator[Any, Any]):
    """Membership over a fixed domain type.

    Accepts a lone value of the domain type, or a sequence of such values,
    whose members must all be in the allowed set. Sequences are returned
    unchanged.

    Example:
        ```python
        digits = ListOf([1, 2, 3, 4])
        digits.validate(3)          # 3
        digits.validate([1, 2, 3])  # [1, 2, 3]
        digits.validate("3")        # TypeMismatchError
        ```
    """

    def __init__(self, values: Iterable[Any], item_type: type | tuple[type, ...] | None = None):
        """Initialize list combinator.

        Args:
            values: Allowed values
            item_type: Domain type. Defaults to the common type of ``values``.

        Raises:
            ValueError: If no domain type is given and ``values`` is empty
                or mixes types
        """
        self.membership = Membership(values)
        if item_type is None:
            types = {type(v) for v in self.membership.allowed}
            if len(types) != 1:
                raise ValueError(
                    "ListOf needs an explicit item_type when values are empty or of mixed types"
                )
            item_type = types.pop()
        self.item_type = item_type
        self.type_str = type_name(item_type)

    def is_item(self, value: Any) -> bool:
        if isinstance(value, bool):
            allowed_types = self.item_type if isinstance(self.item_type, tuple) else (self.item_type,)
            # True is an int, but not a member of an int domain
            if bool not in allowed_types:
                return False
        return isinstance(value, self.item_type)

    def validate(self, value: Any) -> Any:
        if self.is_item(value):
            return self.membership.validate(value)
        if kind_of(value) is ValueKind.SEQUENCE and all(self.is_item(v) for v in value):
            return self.membership.validate_many(value)
        raise TypeMismatchError(
            self.type_str,
            value,
            message=f"type mismatch, expected a `{self.type_str}` or `list[{self.type_str}]` value.",
        )
