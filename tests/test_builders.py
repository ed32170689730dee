"""Tests for building validators from literals."""

import pytest

from dataknobs_schema import (
    Always,
    DictSchema,
    Membership,
    Optional,
    Or,
    Pattern,
    Predicate,
    Type,
    ValueKind,
    schema,
)
from dataknobs_schema.exceptions import (
    KeyValidationError,
    MembershipError,
    PatternMismatchError,
    PredicateError,
    UnexpectedKeysError,
)


class TestSchemaLiterals:
    """Test each literal maps onto its validator."""

    def test_validator_passthrough(self):
        """Test validators are returned unchanged."""
        validator = Type(int)
        assert schema(validator) is validator

    def test_types(self):
        """Test types and kinds build Type validators."""
        assert isinstance(schema(int), Type)
        assert schema(int).validate("5") == 5
        assert schema(ValueKind.FLOAT).validate("2.5") == 2.5

    def test_strings(self):
        """Test strings build Pattern validators."""
        validator = schema(r"^\d{3}$")
        assert isinstance(validator, Pattern)
        assert validator.validate("123") == "123"
        with pytest.raises(PatternMismatchError):
            validator.validate("12")

    def test_collections(self):
        """Test collections build Membership validators."""
        for literal in (["a", "b"], ("a", "b"), {"a", "b"}, frozenset({"a", "b"})):
            validator = schema(literal)
            assert isinstance(validator, Membership)
            assert validator.validate("a") == "a"
            with pytest.raises(MembershipError):
                validator.validate("c")

    def test_booleans(self):
        """Test booleans build Always validators."""
        assert isinstance(schema(True), Always)
        assert schema(True).validate(object) is object
        with pytest.raises(PredicateError):
            schema(False).validate(1)

    def test_callables(self):
        """Test callables build Predicate validators."""
        validator = schema(lambda x: x > 0)
        assert isinstance(validator, Predicate)
        assert validator.validate(3) == 3

    def test_unsupported(self):
        """Test other literals are rejected."""
        with pytest.raises(TypeError, match="Cannot build a validator"):
            schema(42)


class TestSchemaMaps:
    """Test dict literals build nested keyed-map schemas."""

    @pytest.fixture
    def user(self):
        return schema({
            "name": str,
            "role": ["admin", "editor", "viewer"],
            Optional("nickname"): r"^\w+$",
            "age": Type(int) & (lambda age: age >= 18),
            Optional("address"): {"city": str, "zip": r"^\d{5}$"},
        })

    def test_builds_dict_schema(self, user):
        """Test dict literals become DictSchema instances."""
        assert isinstance(user, DictSchema)
        assert isinstance(user.entries["address"][1], DictSchema)

    def test_valid(self, user):
        """Test a valid record is converted."""
        result = user.validate({
            "name": "Sue",
            "role": "admin",
            "age": "30",
            "address": {"city": "Springfield", "zip": "12345"},
        })
        assert result == {
            "name": "Sue",
            "role": "admin",
            "age": 30,
            "address": {"city": "Springfield", "zip": "12345"},
        }

    def test_invalid_nested_value(self, user):
        """Test nested failures are reported through each key."""
        with pytest.raises(KeyValidationError) as exc_info:
            user.validate({
                "name": "Sue",
                "role": "admin",
                "age": 30,
                "address": {"city": "Springfield", "zip": "1234"},
            })
        assert exc_info.value.key == "address"
        assert exc_info.value.find(PatternMismatchError) is not None

    def test_ignore_extra_keys_applies_to_nested_maps(self):
        """Test the extra-key policy reaches every nested map."""
        strict = schema({"inner": {"a": int}})
        lenient = schema({"inner": {"a": int}}, ignore_extra_keys=True)

        with pytest.raises(KeyValidationError) as exc_info:
            strict.validate({"inner": {"a": 1, "b": 2}})
        assert exc_info.value.find(UnexpectedKeysError) is not None
        assert lenient.validate({"inner": {"a": 1, "b": 2}, "c": 3}) == {"inner": {"a": 1}}


class TestOperatorLiterals:
    """Test literal operands of & and |."""

    def test_or_with_membership(self):
        """Test a list on the right of | builds a Membership branch."""
        validator = Pattern(r"^\d+$") | ["none", "all"]
        assert isinstance(validator, Or)
        assert validator.validate("17") == "17"
        assert validator.validate("all") == "all"

    def test_and_with_callable(self):
        """Test a callable on the right of & builds a Predicate stage."""
        validator = Type(int) & (lambda x: x % 2 == 0)
        assert validator.validate("4") == 4
