"""Classification of the dynamic values a validator can receive.

Inputs arrive untyped. ``ValueKind`` names the closed set of shapes the
engine reasons about, and ``kind_of`` maps any Python value onto exactly one
of them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import numpy as np


class ValueKind(Enum):
    """Enumeration of value shapes understood by the engine.

    Attributes:
        NULL: ``None``
        BOOLEAN: ``True``/``False`` (and numpy booleans)
        INTEGER: Whole numbers (never booleans)
        FLOAT: Floating point numbers, single or double precision
        TEXT: Strings
        SEQUENCE: Ordered sequences other than text and bytes
        MAPPING: Mappings (validated as string-keyed maps)
        OTHER: Anything else
    """

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


_PYTHON_TYPES: dict[ValueKind, type | tuple[type, ...]] = {
    ValueKind.NULL: type(None),
    ValueKind.BOOLEAN: (bool, np.bool_),
    ValueKind.INTEGER: (int, np.integer),
    ValueKind.FLOAT: (float, np.floating),
    ValueKind.TEXT: str,
    ValueKind.SEQUENCE: (list, tuple),
    ValueKind.MAPPING: dict,
    ValueKind.OTHER: object,
}


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    Booleans are checked before integers since ``bool`` subclasses ``int``,
    and text is never treated as a sequence.

    Example:
        ```python
        kind_of(True)        # ValueKind.BOOLEAN
        kind_of([1, 2, 3])   # ValueKind.SEQUENCE
        kind_of({"a": 1})    # ValueKind.MAPPING
        ```
    """
    if value is None:
        return ValueKind.NULL
    elif isinstance(value, (bool, np.bool_)):
        return ValueKind.BOOLEAN
    elif isinstance(value, (int, np.integer)):
        return ValueKind.INTEGER
    elif isinstance(value, (float, np.floating)):
        return ValueKind.FLOAT
    elif isinstance(value, str):
        return ValueKind.TEXT
    elif isinstance(value, Mapping):
        return ValueKind.MAPPING
    elif isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.SEQUENCE
    else:
        return ValueKind.OTHER


def python_type(kind: ValueKind | str) -> type | tuple[type, ...]:
    """Get the Python type(s) backing a value kind.

    Args:
        kind: A ValueKind or its name/value (case-insensitive)

    Returns:
        A type or tuple of types usable with ``isinstance``

    Raises:
        ValueError: If ``kind`` is a string naming no ValueKind
    """
    return _PYTHON_TYPES[as_kind(kind)]


def as_kind(kind: ValueKind | str) -> ValueKind:
    """Convert a kind name such as ``"integer"`` to a ValueKind."""
    if isinstance(kind, ValueKind):
        return kind
    try:
        return ValueKind(kind.lower())
    except ValueError as e:
        raise ValueError(f"Invalid value kind: {kind}") from e


def type_name(target: Any) -> str:
    """Get a readable name for a type, tuple of types or kind."""
    if isinstance(target, ValueKind):
        return target.value
    elif isinstance(target, tuple):
        return " | ".join(type_name(t) for t in target)
    elif isinstance(target, type):
        return target.__name__
    return str(target)
