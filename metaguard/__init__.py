"""
MetaGuard - declarative request parameter guards for Flask.

Provides parameter extraction, coercion and validation ahead of a handler,
plus the guard metadata used to generate OpenAPI documents.
"""

from .errors import (
    ValidationError,
    InvalidParameterError,
    MissingRequiredParameter,
    TypeCoercionFailure,
    ConstraintViolation,
    CustomValidationFailure,
)
from .models import (
    ParameterSource,
    SchemaType,
    ParameterSchema,
    ParameterSpec,
    GuardConfig,
)
from .sources import RequestContext, resolve
from .guard import MetaGuard, GuardResult
from .wrapper import meta_guard
from .docs import build_document

__all__ = [
    'ValidationError',
    'InvalidParameterError',
    'MissingRequiredParameter',
    'TypeCoercionFailure',
    'ConstraintViolation',
    'CustomValidationFailure',
    'ParameterSource',
    'SchemaType',
    'ParameterSchema',
    'ParameterSpec',
    'GuardConfig',
    'RequestContext',
    'resolve',
    'MetaGuard',
    'GuardResult',
    'meta_guard',
    'build_document',
]
