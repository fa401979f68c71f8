"""
Per-field pipeline: formatter, then schema coercion, then custom validator.

Formatters and validators receive ``(value, context)``. Validators may be
plain functions or coroutines; their result is interpreted as:

    True / None  -> accept
    False        -> reject with "Invalid param '<name>' in <source>"
    str          -> reject with that string as the message

Exceptions raised by a formatter or validator are not caught here.
"""

import inspect
from typing import Any

from .coerce import apply_schema
from .errors import CustomValidationFailure
from .models import ParameterSpec
from .sources import RequestContext


async def run_validator(field_name: str, spec: ParameterSpec, value: Any, context: RequestContext) -> None:
    result = spec.validator(value, context)
    if inspect.isawaitable(result):
        result = await result

    if result is None or result is True:
        return
    if isinstance(result, str):
        raise CustomValidationFailure(field_name, spec.source, result, received_value=value)
    if result is False:
        raise CustomValidationFailure(field_name, spec.source, received_value=value)


async def process_value(field_name: str, spec: ParameterSpec, value: Any, context: RequestContext) -> Any:
    """
    Run a resolved (present) value through the field's pipeline.

    Returns:
        The final value to store for ``field_name``

    Raises:
        InvalidParameterError: If coercion, a constraint or the validator rejects it
    """
    if spec.formatter is not None:
        value = spec.formatter(value, context)

    value = apply_schema(field_name, spec.source, value, spec.param_schema)

    if spec.validator is not None:
        await run_validator(field_name, spec, value, context)

    return value
