"""
Source resolution - reads a declared parameter from the request.

The guard never touches a transport type directly. Adapters (see wrapper.py
for Flask) build a RequestContext holding the five source maps plus a
request-scoped ``locals`` mapping the guard publishes its results into.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .models import ParameterSource


@dataclass
class RequestContext:
    """Opaque request accessor handed to resolvers, formatters and validators."""
    path_params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)
    locals: Dict[str, Any] = field(default_factory=dict)

    # Underlying transport request, for formatters/validators that need it
    request: Any = None
    request_id: Optional[str] = None

    def get(self, source: str, field_name: str) -> Any:
        return resolve(self, field_name, source)


def _source_map(context: RequestContext, source: ParameterSource) -> Mapping[str, Any]:
    if source is ParameterSource.PATH:
        return context.path_params
    if source is ParameterSource.QUERY:
        return context.query
    if source is ParameterSource.HEADER:
        return context.headers
    if source is ParameterSource.COOKIE:
        return context.cookies
    return context.body


def resolve(context: RequestContext, field_name: str, source: str) -> Any:
    """
    Look up ``field_name`` in the map selected by ``source``.

    Returns None when the value is absent. Unknown source tags also resolve
    to None rather than raising, so a misspelt ``in`` degrades to
    "not provided".
    """
    try:
        location = ParameterSource(source)
    except ValueError:
        return None

    values = _source_map(context, location)
    if values is None:
        return None
    return values.get(field_name)
