"""
MetaGuard - validates one request's declared parameters.

Usage:
    guard = MetaGuard({
        "annotateLocals": "inputs",
        "parameters": {
            "page": {"in": "query", "schema": {"type": "integer", "minimum": 1}},
        },
    })

    result = await guard.run(context)       # GuardResult, never raises
    await guard.handle(context, call_next)  # continuation style

Fields are resolved strictly in configuration order, one at a time, and the
first failure ends the run. There is no partial result.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .errors import InvalidParameterError, MissingRequiredParameter
from .models import GuardConfig, ParameterSpec
from .pipeline import process_value
from .sources import RequestContext, resolve


logger = logging.getLogger('metaguard.guard')

# call_next(error) - error is None on success
Continuation = Callable[[Optional[BaseException]], Awaitable[Any]]


@dataclass
class GuardResult:
    """Outcome of one guard run: the parsed values or a single terminal error."""
    values: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MetaGuard:
    """
    Validation unit for one route.

    ``metadata`` is the GuardConfig unless the config is hidden, in which case
    it is None. The config itself is immutable and shared by all requests.
    """

    def __init__(self, config: Union[GuardConfig, Mapping[str, Any]]):
        if not isinstance(config, GuardConfig):
            config = GuardConfig.from_dict(dict(config))
        # Validation runs from a private copy; the exported metadata cannot alter it
        self.config = _private_copy(config)
        self.metadata: Optional[GuardConfig] = None if config.hidden else config

        logger.debug(
            f"Guard built with {len(config.parameters)} param(s), hidden={config.hidden}"
        )

    async def resolve_field(self, field_name: str, spec: ParameterSpec, context: RequestContext) -> Any:
        """Resolve, default and validate a single field."""
        value = resolve(context, field_name, spec.source)
        if value is not None:
            return await process_value(field_name, spec, value, context)

        schema = spec.param_schema
        if schema is not None and schema.default is not None:
            return copy.deepcopy(schema.default)
        if spec.required:
            raise MissingRequiredParameter(field_name, spec.source)
        return None

    async def validate(self, context: RequestContext) -> Optional[Dict[str, Any]]:
        """
        Validate every declared field in order.

        Returns:
            Mapping of field name to final value, or None when no fields
            are declared

        Raises:
            InvalidParameterError: On the first rejected field
            Exception: Anything a formatter or validator raises, unchanged
        """
        if not self.config.parameters:
            return None

        parsed = {}
        for field_name, spec in self.config.parameters.items():
            parsed[field_name] = await self.resolve_field(field_name, spec, context)
        return parsed

    async def run(self, context: RequestContext) -> GuardResult:
        """Validate and publish, capturing any pipeline error in the result."""
        try:
            values = await self.validate(context)
        except InvalidParameterError as e:
            _log_rejection(e, context)
            return GuardResult(error=e)
        except Exception as e:
            logger.warning(
                f"Guard pipeline raised {type(e).__name__}: {e}",
                extra={
                    "event": "guard_error",
                    "request_id": context.request_id,
                    "error_type": type(e).__name__,
                },
            )
            return GuardResult(error=e)

        if values is not None and self.config.annotate_locals:
            context.locals[self.config.annotate_locals] = values
        return GuardResult(values=values)

    async def handle(self, context: RequestContext, call_next: Continuation) -> Any:
        """
        Run the guard, then resume the caller's continuation.

        ``call_next`` receives the terminal error on failure and None on
        success. Errors raised by ``call_next`` itself propagate.
        """
        result = await self.run(context)
        return await call_next(result.error)


def _private_copy(config: GuardConfig) -> GuardConfig:
    """Copy the parameter table and schemas; formatters and validators are shared."""
    parameters = {
        name: spec.model_copy(update={
            "param_schema": spec.param_schema.model_copy(deep=True) if spec.param_schema else None,
        })
        for name, spec in config.parameters.items()
    }
    return config.model_copy(update={"parameters": parameters})


def _log_rejection(error: InvalidParameterError, context: RequestContext) -> None:
    logger.info(
        f"Guard rejected request: {error.message}",
        extra={
            "event": "invalid_param",
            "field": error.field,
            "source": error.source,
            "request_id": context.request_id,
        },
    )
