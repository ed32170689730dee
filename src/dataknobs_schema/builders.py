"""Build validators from literal Python data.

``schema()`` is shorthand only: every literal maps onto one of the ordinary
constructors.

Example:
    ```python
    user = schema({
        "name": str,
        "role": ["admin", "editor", "viewer"],
        Optional("nickname"): r"^\\w+$",
        "age": Type(int) & (lambda age: age >= 18),
    })
    ```
"""

from __future__ import annotations

from typing import Any

from .base import Validator
from .dict_schema import DictSchema
from .kinds import ValueKind
from .validators import Always, Membership, Pattern, Predicate, Type


def schema(spec: Any, ignore_extra_keys: bool | None = None) -> Validator[Any, Any]:
    """Build a validator from a literal.

    Args:
        spec: One of:
            - a Validator, returned as is
            - a type or ValueKind, giving ``Type``
            - a string, giving ``Pattern``
            - a dict, giving ``DictSchema`` with each value built recursively
            - a list, tuple, set or frozenset, giving ``Membership``
            - a bool, giving ``Always``
            - any other callable, giving ``Predicate``
        ignore_extra_keys: Passed to every DictSchema built from a dict

    Returns:
        The built validator

    Raises:
        TypeError: If ``spec`` matches none of the above
    """
    if isinstance(spec, Validator):
        return spec
    elif isinstance(spec, (type, ValueKind)):
        return Type(spec)
    elif isinstance(spec, str):
        return Pattern(spec)
    elif isinstance(spec, dict):
        return DictSchema(
            {key: schema(value, ignore_extra_keys) for key, value in spec.items()},
            ignore_extra_keys=ignore_extra_keys,
        )
    elif isinstance(spec, (list, tuple, set, frozenset)):
        return Membership(spec)
    elif isinstance(spec, bool):
        return Always(spec)
    elif callable(spec):
        return Predicate(spec)
    raise TypeError(f"Cannot build a validator from {type(spec).__name__}: {spec!r}")
