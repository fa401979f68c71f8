"""
Unit tests for metaguard/coerce.py

Covers type coercion, constraint ordering and the exact error messages
returned to clients.
"""

import pytest

from metaguard.coerce import apply_schema, coerce, to_boolean, to_integer, to_number
from metaguard.errors import ConstraintViolation, InvalidParameterError, TypeCoercionFailure
from metaguard.models import ParameterSchema, SchemaType


def schema(**kwargs) -> ParameterSchema:
    return ParameterSchema(**kwargs)


class TestToInteger:
    """Tests for to_integer()"""

    def test_valid_int_string(self):
        assert to_integer("6", field="page", source="query") == 6
        assert to_integer("-4", field="page", source="query") == -4

    def test_invalid_string_raises(self):
        with pytest.raises(TypeCoercionFailure) as exc:
            to_integer("asdf", field="page", source="query")
        assert str(exc.value) == "Invalid param 'page' in query: integer required"
        assert exc.value.expected_type == "integer"
        assert exc.value.received_value == "asdf"

    def test_float_string_raises(self):
        with pytest.raises(TypeCoercionFailure):
            to_integer("3.14", field="page", source="query")

    def test_surrounding_whitespace_allowed(self):
        assert to_integer(" 6 ", field="page", source="query") == 6

    @pytest.mark.parametrize("raw", ["1_000", "\u0663", "0x10", "", "+"])
    def test_non_decimal_literals_rejected(self, raw):
        with pytest.raises(TypeCoercionFailure):
            to_integer(raw, field="page", source="query")


class TestToNumber:
    """Tests for to_number()"""

    def test_valid_float_string(self):
        assert to_number("10.99", field="price", source="body") == 10.99
        assert to_number("100", field="price", source="body") == 100.0

    def test_invalid_string_raises(self):
        with pytest.raises(TypeCoercionFailure) as exc:
            to_number("asdf", field="price", source="body")
        assert str(exc.value) == "Invalid param 'price' in body: number required"

    def test_nan_rejected(self):
        with pytest.raises(TypeCoercionFailure):
            to_number("nan", field="price", source="body")

    def test_exponent_and_leading_dot(self):
        assert to_number("1e3", field="price", source="body") == 1000.0
        assert to_number(".5", field="price", source="body") == 0.5

    @pytest.mark.parametrize("raw", ["1_0.5", "infinity", "inf", "-Infinity", "\u0663.5", "10abc"])
    def test_non_decimal_literals_rejected(self, raw):
        with pytest.raises(TypeCoercionFailure):
            to_number(raw, field="price", source="body")


class TestToBoolean:
    """Tests for to_boolean()"""

    @pytest.mark.parametrize("raw", ["1", "true", "True", "TRUE"])
    def test_true_values(self, raw):
        assert to_boolean(raw, field="flag", source="query") is True

    @pytest.mark.parametrize("raw", ["0", "false", "False", "FALSE"])
    def test_false_values(self, raw):
        assert to_boolean(raw, field="flag", source="query") is False

    @pytest.mark.parametrize("raw", ["asdf", "yes", "tRUE", ""])
    def test_other_strings_rejected(self, raw):
        with pytest.raises(TypeCoercionFailure) as exc:
            to_boolean(raw, field="flag", source="query")
        assert str(exc.value) == "Invalid param 'flag' in query: boolean required"


class TestCoerce:
    """Tests for coerce() dispatch"""

    def test_string_target_stringifies(self):
        assert coerce("id", "path", 10, SchemaType.STRING) == "10"
        assert coerce("id", "path", True, SchemaType.STRING) == "true"

    def test_string_target_keeps_strings(self):
        assert coerce("id", "path", "abc", SchemaType.STRING) == "abc"

    def test_typed_values_not_reparsed(self):
        assert coerce("count", "body", 10, SchemaType.INTEGER) == 10
        assert coerce("flag", "body", False, SchemaType.BOOLEAN) is False

    def test_unspecified_passes_through(self):
        assert coerce("tags", "body", "a,b", SchemaType.UNSPECIFIED) == "a,b"


class TestApplySchema:
    """Tests for apply_schema()"""

    def test_no_schema_is_identity(self):
        value = {"nested": [1, 2]}
        assert apply_schema("data", "body", value, None) is value

    def test_absent_value_untouched(self):
        assert apply_schema("page", "query", None, schema(type="integer", minimum=1)) is None

    def test_unknown_type_passes_through(self):
        assert apply_schema("ids", "query", "1,2", schema(type="array")) == "1,2"

    def test_minimum(self):
        assert apply_schema("page", "query", "1", schema(type="integer", minimum=1)) == 1
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("page", "query", "0", schema(type="integer", minimum=1))
        assert str(exc.value) == "Invalid param 'page' in query: must be >= 1"
        assert exc.value.constraint == "minimum"

    def test_maximum(self):
        assert apply_schema("page", "query", "10", schema(type="integer", maximum=10)) == 10
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("page", "query", "11", schema(type="integer", maximum=10))
        assert str(exc.value) == "Invalid param 'page' in query: must be <= 10"

    def test_exclusive_minimum_fails_at_boundary(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("page", "query", "1", schema(type="integer", exclusiveMinimum=1))
        assert str(exc.value) == "Invalid param 'page' in query: must be > 1"
        assert apply_schema("page", "query", "2", schema(type="integer", exclusiveMinimum=1)) == 2

    def test_exclusive_maximum_fails_at_boundary(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("price", "body", 5.5, schema(type="number", exclusiveMaximum=5.5))
        assert str(exc.value) == "Invalid param 'price' in body: must be < 5.5"

    def test_min_length(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("name", "query", "ab", schema(type="string", minLength=3))
        assert str(exc.value) == "Invalid param 'name' in query: length must be >= 3"

    def test_max_length(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("name", "query", "abcd", schema(type="string", maxLength=3))
        assert str(exc.value) == "Invalid param 'name' in query: length must be <= 3"

    def test_length_bounds_ignore_numbers(self):
        assert apply_schema("count", "query", "12345", schema(type="integer", maxLength=2)) == 12345

    def test_numeric_bounds_ignore_strings(self):
        assert apply_schema("code", "query", "0", schema(type="string", minimum=5)) == "0"

    def test_enum_lists_values_in_declared_order(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("sort", "query", "up", schema(type="string", enum=["desc", "asc", "none"]))
        assert str(exc.value) == "Invalid param 'sort' in query: must be one of \"desc, asc, none\""

    def test_enum_numbers_rendered_without_trailing_zero(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("ratio", "query", "3", schema(type="number", enum=[2.0, 2.5, 10]))
        assert str(exc.value) == "Invalid param 'ratio' in query: must be one of \"2, 2.5, 10\""

    def test_enum_checked_after_coercion(self):
        assert apply_schema("size", "query", "2", schema(type="integer", enum=[1, 2, 3])) == 2

    def test_range_checked_before_enum(self):
        with pytest.raises(ConstraintViolation) as exc:
            apply_schema("size", "query", "9", schema(type="integer", maximum=5, enum=[1, 2]))
        assert exc.value.constraint == "maximum"

    def test_coercion_failure_skips_constraints(self):
        with pytest.raises(TypeCoercionFailure):
            apply_schema("page", "query", "x", schema(type="integer", minimum=1))

    def test_errors_are_invalid_parameter_errors(self):
        with pytest.raises(InvalidParameterError) as exc:
            apply_schema("page", "query", "0", schema(type="integer", minimum=1))
        assert exc.value.status == 406
        assert exc.value.field == "page"
        assert exc.value.source == "query"
