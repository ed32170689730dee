"""Pytest configuration for dataknobs_schema tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_schema import DictSchema, Predicate, Type, reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with the built-in settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def person_schema():
    """Schema for a named adult."""
    return DictSchema({
        "name": Type(str),
        "age": Predicate(lambda age: 18 <= age <= 99),
    })


class NotConvertible:
    """Object with neither __str__ nor __repr__ of its own."""


@pytest.fixture
def not_convertible():
    return NotConvertible()
