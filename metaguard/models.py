"""
Guard configuration models - the declarative surface of a guard.

A GuardConfig is built once at route registration and frozen afterwards; it
is shared read-only by every request handled by that route and doubles as the
metadata consumed by the OpenAPI generator.

Models accept the camelCase configuration keys used in generated documents
(``in``, ``annotateLocals``, ``exclusiveMinimum``, ...) as well as their
Python field names.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Number = Union[int, float]

# formatter(value, context) -> value
Formatter = Callable[[Any, Any], Any]

# validator(value, context) -> True | False | None | str, or an awaitable of one
Validator = Callable[[Any, Any], Any]


class ParameterSource(str, Enum):
    """Request location a parameter is read from."""
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"


class SchemaType(Enum):
    """Coercion target. Any undeclared or unknown type is UNSPECIFIED."""
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    UNSPECIFIED = None

    @classmethod
    def parse(cls, value: Optional[str]) -> "SchemaType":
        for member in cls:
            if member.value is not None and member.value == value:
                return member
        return cls.UNSPECIFIED


class FrozenModel(BaseModel):
    """
    Base model for guard configuration.

    - frozen=True: configuration is immutable once a guard is built
    - populate_by_name=True: accept both camelCase alias and field name
    - extra='ignore': unknown keys are dropped
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra='ignore',
    )


class ParameterSchema(FrozenModel):
    """Type, constraint and documentation descriptor of one parameter."""

    type: Optional[str] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = Field(None, alias='exclusiveMinimum')
    exclusive_maximum: Optional[Number] = Field(None, alias='exclusiveMaximum')
    min_length: Optional[int] = Field(None, alias='minLength')
    max_length: Optional[int] = Field(None, alias='maxLength')
    enum: Optional[List[Any]] = None
    default: Any = None

    # Documentation only, never enforced
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    deprecated: Optional[bool] = None
    example: Any = None
    nullable: Optional[bool] = None

    @property
    def kind(self) -> SchemaType:
        return SchemaType.parse(self.type)

    def to_openapi(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ParameterSpec(FrozenModel):
    """One declared request parameter."""

    source: str = Field(alias='in')
    required: bool = False
    formatter: Optional[Formatter] = None
    validator: Optional[Validator] = None
    param_schema: Optional[ParameterSchema] = Field(None, alias='schema')

    @property
    def is_passthrough(self) -> bool:
        """True when the value is extracted without coercion or validation."""
        return self.param_schema is None and self.validator is None


class GuardConfig(FrozenModel):
    """
    Complete configuration for one guarded route.

    ``parameters`` keeps insertion order: it is both the validation order and
    the order in which the first error is reported.
    """

    hidden: bool = False
    annotate_locals: Optional[str] = Field(None, alias='annotateLocals')
    parameters: Dict[str, ParameterSpec] = Field(default_factory=dict)

    # Documentation fields
    path: Optional[str] = None
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[Dict[str, Any]] = Field(None, alias='externalDocs')
    operation_id: Optional[str] = Field(None, alias='operationId')
    request_body: Optional[Dict[str, Any]] = Field(None, alias='requestBody')
    responses: Optional[Dict[Union[int, str], Union[str, Dict[str, Any]]]] = None
    deprecated: Optional[bool] = None

    @classmethod
    def from_dict(cls, props: Dict[str, Any]) -> "GuardConfig":
        return cls.model_validate(props)
