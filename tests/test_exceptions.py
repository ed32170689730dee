"""Tests for the validation error model."""

import pytest

from dataknobs_schema.exceptions import (
    AlternativeError,
    CoercionError,
    ConfigurationError,
    EmptyResultError,
    ForbiddenKeyError,
    KeyValidationError,
    MissingKeyError,
    PatternCompileError,
    PredicateError,
    SchemaError,
    StageError,
    TypeMismatchError,
    UnexpectedKeysError,
    describe,
)


class TestSchemaError:
    """Test the base SchemaError class."""

    def test_message_only(self):
        """Test an error without causes describes itself by its message."""
        error = SchemaError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.causes == ()
        assert error.context == {}
        assert error.details == {}

    def test_causes_are_described_in_order(self):
        """Test causes follow the message, in order."""
        error = SchemaError("outer", SchemaError("first"), SchemaError("second"))
        assert str(error) == "outer (first, second)"

    def test_description_is_recursive(self):
        """Test nested causes are described at every level."""
        inner = SchemaError("inner", ValueError("bad digit"))
        error = SchemaError("outer", inner)
        assert str(error) == "outer (inner (bad digit))"

    def test_foreign_cause_without_message(self):
        """Test a foreign exception with no message is described by type."""
        assert describe(KeyError()) == "KeyError"
        assert str(SchemaError("outer", RuntimeError())) == "outer (RuntimeError)"

    def test_first_cause_is_chained(self):
        """Test tracebacks chain to the first cause."""
        first = ValueError("first")
        error = SchemaError("outer", first, ValueError("second"))
        assert error.__cause__ is first

    def test_context(self):
        """Test context is stored with a details alias."""
        error = SchemaError("failed", context={"key": "age"})
        assert error.context == {"key": "age"}
        assert error.details is error.context

    def test_walk_is_depth_first(self):
        """Test walk yields nested SchemaErrors depth-first, skipping foreign ones."""
        leaf_a = SchemaError("a", ValueError("not a schema error"))
        leaf_b = SchemaError("b")
        middle = SchemaError("middle", leaf_a)
        root = SchemaError("root", middle, leaf_b)

        assert [e.message for e in root.walk()] == ["root", "middle", "a", "b"]

    def test_find(self):
        """Test find returns the first error of a kind."""
        missing = MissingKeyError("x")
        root = SchemaError("root", SchemaError("middle", missing))
        assert root.find(MissingKeyError) is missing
        assert root.find(PatternCompileError) is None
        assert root.find(SchemaError) is root

    def test_catchable_as_exception(self):
        """Test schema errors are ordinary exceptions."""
        with pytest.raises(Exception):
            raise SchemaError("Test error")


class TestErrorKinds:
    """Test the specific error kinds."""

    def test_type_mismatch(self):
        """Test type mismatch names the expected type."""
        error = TypeMismatchError("int", "four")
        assert "`int`" in str(error)
        assert error.expected == "int"
        assert error.context == {"expected": "int", "actual": "str"}

    def test_coercion_error_is_type_mismatch(self):
        """Test coercion failures are a kind of type mismatch."""
        error = CoercionError("int", "four")
        assert isinstance(error, TypeMismatchError)
        assert "'four'" in str(error)

    def test_coercion_error_with_reason(self):
        """Test a coercion failure can carry the underlying error."""
        reason = OverflowError("too large")
        error = CoercionError("int8", "300", reason)
        assert error.causes == (reason,)
        assert error.__cause__ is reason

    def test_missing_key(self):
        """Test missing key errors name the key."""
        error = MissingKeyError("x")
        assert str(error) == "missing key 'x'"
        assert error.key == "x"

    def test_unexpected_key_singular(self):
        """Test the singular message form."""
        assert str(UnexpectedKeysError(["extra"])) == "unexpected key 'extra'."

    def test_unexpected_keys_plural(self):
        """Test the plural message lists every key."""
        error = UnexpectedKeysError(["a", "b"])
        assert str(error) == "unexpected keys 'a', 'b'"
        assert error.keys == ["a", "b"]

    def test_forbidden_key(self):
        """Test forbidden key errors name the key."""
        error = ForbiddenKeyError("debug")
        assert "forbidden key 'debug'" in str(error)

    def test_key_validation_wraps_cause(self):
        """Test per-key failures carry the key and the cause."""
        cause = PredicateError("predicate failed to validate")
        error = KeyValidationError("age", cause)
        assert error.key == "age"
        assert error.causes == (cause,)
        assert str(error) == "validation failed for key 'age'. (predicate failed to validate)"

    def test_stage_error(self):
        """Test sequential stage failures record the stage."""
        error = StageError("second", PredicateError("odd"))
        assert error.stage == "second"
        assert "second stage" in str(error)

    def test_alternative_error_keeps_both(self):
        """Test both branch failures are kept, in order."""
        first = PredicateError("too small")
        second = PredicateError("too large")
        error = AlternativeError(first, second)
        assert error.causes == (first, second)

    def test_empty_result(self):
        """Test the empty result message."""
        assert str(EmptyResultError()) == "schema result was empty"

    def test_all_kinds_are_schema_errors(self):
        """Test every validation failure can be caught as SchemaError."""
        for error in [
            TypeMismatchError("int", 1),
            MissingKeyError("x"),
            UnexpectedKeysError(["y"]),
            ForbiddenKeyError("z"),
            EmptyResultError(),
        ]:
            assert isinstance(error, SchemaError)


class TestConfigurationError:
    """Test ConfigurationError."""

    def test_not_a_schema_error(self):
        """Test settings problems are kept apart from validation failures."""
        error = ConfigurationError("Unknown setting", context={"setting": "x"})
        assert not isinstance(error, SchemaError)
        assert error.context == {"setting": "x"}
        assert error.details == {"setting": "x"}
