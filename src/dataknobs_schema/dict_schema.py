"""Keyed-map validation against a table of per-key validators.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .base import Validator
from .exceptions import (
    ForbiddenKeyError,
    KeyValidationError,
    MissingKeyError,
    SchemaError,
    TypeMismatchError,
    UnexpectedKeysError,
)
from .keys import Key, as_key
from .settings import get_settings

logger = logging.getLogger(__name__)

SchemaTable = Mapping[Key | str, Validator[Any, Any]] | Iterable[tuple[Key | str, Validator[Any, Any]]]


class DictSchema(Validator[Mapping[str, Any], dict[str, Any]]):
    """Validates a string-keyed mapping against per-key validators.

    Key presence is governed by the key variant: ``Required`` keys must be
    present, ``Optional`` keys may be absent, ``Forbidden`` keys are
    rejected when their value matches the paired validator. Plain strings
    are required keys.

    Validation is fail-fast: the first failing key aborts the whole map.
    The result is a new dict holding only the schema's keys that were
    present, with their validated values.

    Example:
        ```python
        person = DictSchema({
            "name": Type(str),
            "age": Predicate(lambda age: 18 <= age <= 99),
            Optional("email"): Pattern(r"^[^@]+@[^@]+$"),
        })
        person.validate({"name": "Sue", "age": 28})
        # {'name': 'Sue', 'age': 28}
        ```
    """

    def __init__(self, table: SchemaTable, ignore_extra_keys: bool | None = None):
        """Initialize dict schema.

        Args:
            table: Mapping (or iterable of pairs) from keys to validators
            ignore_extra_keys: If True, keys absent from the table are
                dropped instead of rejected. Defaults to the current settings.

        Raises:
            ValueError: If two entries share a key name
        """
        settings = get_settings()
        if ignore_extra_keys is None:
            ignore_extra_keys = settings.ignore_extra_keys
        self.ignore_extra_keys = ignore_extra_keys
        self.log_failures = settings.log_failures

        pairs = table.items() if isinstance(table, Mapping) else table
        self.entries: dict[str, tuple[Key, Validator[Any, Any]]] = {}
        for raw_key, validator in pairs:
            key = as_key(raw_key)
            if key.name in self.entries:
                raise ValueError(f"Duplicate key in schema: '{key.name}'")
            self.entries[key.name] = (key, validator)

    @property
    def keys(self) -> list[Key]:
        return [key for key, _ in self.entries.values()]

    def validate(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise TypeMismatchError("dict", value)

        try:
            return self._validate_mapping(value)
        except SchemaError as e:
            if self.log_failures:
                logger.debug(f"Mapping failed validation: {e}")
            raise

    def _validate_mapping(self, data: Mapping[Any, Any]) -> dict[str, Any]:
        provided = set(data.keys())

        resolved: list[tuple[Key, Validator[Any, Any]]] = []
        for name, (key, validator) in self.entries.items():
            if name in provided:
                resolved.append((key, validator))
            elif key.required:
                raise MissingKeyError(name)

        if not self.ignore_extra_keys:
            unexpected = provided - {key.name for key, _ in resolved}
            if unexpected:
                raise UnexpectedKeysError(sorted(unexpected, key=str))

        result: dict[str, Any] = {}
        for key, validator in resolved:
            try:
                if key.forbidden:
                    result[key.name] = self._check_forbidden(key, validator, data[key.name])
                else:
                    result[key.name] = validator.validate(data[key.name])
            except SchemaError as e:
                raise KeyValidationError(key.name, e) from e

        return result

    def _check_forbidden(self, key: Key, validator: Validator[Any, Any], raw: Any) -> Any:
        """A forbidden key passes, with its raw value, only when the validator rejects it."""
        try:
            validator.validate(raw)
        except SchemaError:
            return raw
        raise ForbiddenKeyError(key.name)
