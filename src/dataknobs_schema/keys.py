"""Key variants governing presence rules in a DictSchema.

A key is identified by its name alone: ``Required("a") == Optional("a")``
and both hash alike, so a schema table can never hold two rules for the
same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, eq=False)
class Key:
    """Base class for key variants."""

    name: str

    required: ClassVar[bool] = False
    forbidden: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Key name must be a string, got {type(self.name).__name__}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Key):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)


@dataclass(frozen=True, eq=False)
class Required(Key):
    """The key must be present."""

    required: ClassVar[bool] = True


@dataclass(frozen=True, eq=False)
class Optional(Key):
    """The key may be absent.

    ``default`` documents the value assumed when the key is missing; it is
    not written into validated output.
    """

    default: Any = None


@dataclass(frozen=True, eq=False)
class Forbidden(Key):
    """The key is rejected when its value satisfies the paired validator.

    A value the validator rejects passes through unchanged.
    """

    forbidden: ClassVar[bool] = True


def as_key(key: Key | str) -> Key:
    """Plain strings name required keys."""
    if isinstance(key, Key):
        return key
    return Required(key)
