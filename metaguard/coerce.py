"""
Coercion & constraint engine.

Converts a raw request value to the declared schema type and checks range,
length and enum constraints. All failures raise InvalidParameterError
subclasses whose messages are part of the public API:

    Invalid param 'page' in query: integer required
    Invalid param 'page' in query: must be >= 1
    Invalid param 'name' in query: length must be <= 20
    Invalid param 'sort' in query: must be one of "asc, desc"
"""

import re
from typing import Any, Optional

from .errors import ConstraintViolation, TypeCoercionFailure
from .models import ParameterSchema, SchemaType


BOOLEAN_LITERALS = frozenset({'0', '1', 'true', 'false', 'True', 'False', 'TRUE', 'FALSE'})
TRUTHY_LITERALS = frozenset({'1', 'true', 'True', 'TRUE'})

# ASCII decimal literals only: no underscores, non-ASCII digits, inf or nan
INTEGER_LITERAL = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)
NUMBER_LITERAL = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*", re.ASCII)


def to_integer(value: str, *, field: str, source: str) -> int:
    """
    Parse a string as an integer.

    Args:
        value: Raw string (typically a path or query param)
        field: Field name for error messages
        source: Parameter source for error messages

    Raises:
        TypeCoercionFailure: If value is not an integer literal
    """
    if not INTEGER_LITERAL.fullmatch(value):
        raise TypeCoercionFailure(field, source, 'integer', received_value=value)
    return int(value)


def to_number(value: str, *, field: str, source: str) -> float:
    """
    Parse a string as a float. inf and nan are rejected like any other non-number.

    Raises:
        TypeCoercionFailure: If value is not a numeric literal
    """
    if not NUMBER_LITERAL.fullmatch(value):
        raise TypeCoercionFailure(field, source, 'number', received_value=value)
    return float(value)


def to_boolean(value: str, *, field: str, source: str) -> bool:
    """
    Convert one of the accepted boolean literals.

    Accepts exactly: 0, 1, true, false, True, False, TRUE, FALSE.

    Raises:
        TypeCoercionFailure: If value is not an accepted literal
    """
    if value not in BOOLEAN_LITERALS:
        raise TypeCoercionFailure(field, source, 'boolean', received_value=value)
    return value in TRUTHY_LITERALS


def to_string(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def coerce(field: str, source: str, value: Any, kind: SchemaType) -> Any:
    """Convert ``value`` to ``kind`` when its present type does not match."""
    if kind is SchemaType.STRING:
        return value if isinstance(value, str) else to_string(value)

    # Only raw strings are parsed; already-typed values pass through
    if not isinstance(value, str):
        return value

    if kind is SchemaType.INTEGER:
        return to_integer(value, field=field, source=source)
    if kind is SchemaType.NUMBER:
        return to_number(value, field=field, source=source)
    if kind is SchemaType.BOOLEAN:
        return to_boolean(value, field=field, source=source)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_bound(bound: Any) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def check_constraints(field: str, source: str, value: Any, schema: ParameterSchema) -> None:
    """
    Check range, length and enum constraints in their fixed order.

    Numeric bounds apply to numbers only, length bounds to strings only.

    Raises:
        ConstraintViolation: On the first violated constraint
    """
    def violation(constraint: str, reason: str) -> ConstraintViolation:
        return ConstraintViolation(field, source, constraint, reason, received_value=value)

    if _is_number(value):
        if schema.minimum is not None and not value >= schema.minimum:
            raise violation('minimum', f"must be >= {_format_bound(schema.minimum)}")
        if schema.maximum is not None and not value <= schema.maximum:
            raise violation('maximum', f"must be <= {_format_bound(schema.maximum)}")
        if schema.exclusive_minimum is not None and not value > schema.exclusive_minimum:
            raise violation('exclusiveMinimum', f"must be > {_format_bound(schema.exclusive_minimum)}")
        if schema.exclusive_maximum is not None and not value < schema.exclusive_maximum:
            raise violation('exclusiveMaximum', f"must be < {_format_bound(schema.exclusive_maximum)}")

    if isinstance(value, str):
        if schema.min_length is not None and len(value) < schema.min_length:
            raise violation('minLength', f"length must be >= {schema.min_length}")
        if schema.max_length is not None and len(value) > schema.max_length:
            raise violation('maxLength', f"length must be <= {schema.max_length}")

    if schema.enum is not None and value not in schema.enum:
        allowed = ', '.join(_format_bound(v) if _is_number(v) else to_string(v) for v in schema.enum)
        raise violation('enum', f'must be one of "{allowed}"')


def apply_schema(field: str, source: str, value: Any, schema: Optional[ParameterSchema]) -> Any:
    """
    Coerce ``value`` to its schema type, then check its constraints.

    Returns the value unchanged when there is no schema or no value.

    Raises:
        TypeCoercionFailure: If the value cannot be converted
        ConstraintViolation: If a constraint is violated after coercion
    """
    if schema is None or value is None:
        return value

    value = coerce(field, source, value, schema.kind)
    check_constraints(field, source, value, schema)
    return value
