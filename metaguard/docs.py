"""
OpenAPI document generator.

Walks a Flask app's URL map, reads the metadata exposed by guarded views and
synthesizes an OpenAPI 3 document:

- tags, summary, description, operationId are copied as-is
- body params merge into a JSON request body object schema
- all other params become entries of ``parameters``
- string responses are shorthand refs; a trailing "[]" means an array of them
"""

import logging
import re
from typing import Any, Dict, List, Optional

from flask import Flask

from .config import Config
from .models import GuardConfig, ParameterSource


logger = logging.getLogger('metaguard.docs')

DIRECT_COPY_KEYS = {
    'tags': 'tags',
    'summary': 'summary',
    'description': 'description',
    'operation_id': 'operationId',
}

DEFAULT_RESPONSES = {'200': {'description': 'Success'}}

UNDOCUMENTED_METHODS = {'HEAD', 'OPTIONS'}

_RULE_VARIABLE = re.compile(r'<(?:[^:<>]+:)?([^<>]+)>')


def openapi_path(rule: str) -> str:
    """Convert a Flask rule ("/books/<int:book_id>") to "/books/{book_id}"."""
    return _RULE_VARIABLE.sub(r'{\1}', rule)


def expand_response(response: Any) -> Any:
    """Expand a shorthand schema ref; full response objects pass through."""
    if not isinstance(response, str):
        return response

    if '[]' in response:
        schema = {'type': 'array', 'items': {'$ref': response.replace('[]', '')}}
    else:
        schema = {'$ref': response}

    return {
        'description': 'Success',
        'content': {'application/json': {'schema': schema}},
    }


def build_operation(metadata: Optional[GuardConfig]) -> Dict[str, Any]:
    """Build one OpenAPI operation object from guard metadata."""
    entry: Dict[str, Any] = {}
    if metadata is None:
        entry['responses'] = dict(DEFAULT_RESPONSES)
        return entry

    for attr, key in DIRECT_COPY_KEYS.items():
        value = getattr(metadata, attr)
        if value:
            entry[key] = value

    for name, parameter in metadata.parameters.items():
        schema = parameter.param_schema.to_openapi() if parameter.param_schema else None

        if parameter.source == ParameterSource.BODY.value:
            if 'requestBody' not in entry:
                entry['requestBody'] = {
                    'content': {
                        'application/json': {
                            'schema': {'type': 'object', 'properties': {}, 'required': []},
                        },
                    },
                }
            body_schema = entry['requestBody']['content']['application/json']['schema']
            body_schema['properties'][name] = schema or {}
            if parameter.required:
                body_schema['required'].append(name)
        else:
            entry.setdefault('parameters', []).append({
                'name': name,
                'in': parameter.source,
                'required': parameter.required,
                'schema': schema or {'type': 'string'},
            })

    if metadata.responses:
        entry['responses'] = {
            str(code): expand_response(response)
            for code, response in metadata.responses.items()
        }
    else:
        entry['responses'] = dict(DEFAULT_RESPONSES)

    return entry


def build_paths(app: Flask) -> Dict[str, Dict[str, Any]]:
    """Build the ``paths`` object for every routed view of ``app``."""
    paths: Dict[str, Dict[str, Any]] = {}

    for rule in app.url_map.iter_rules():
        if rule.endpoint == 'static':
            continue

        view = app.view_functions.get(rule.endpoint)
        metadata = getattr(view, 'metadata', None)
        path = metadata.path if metadata is not None and metadata.path else openapi_path(rule.rule)

        methods = sorted(m for m in (rule.methods or ()) if m not in UNDOCUMENTED_METHODS)
        for method in methods:
            paths.setdefault(path, {})[method.lower()] = build_operation(metadata)

    logger.debug(f"Documented {len(paths)} path(s)")
    return paths


def build_document(
    app: Flask,
    *,
    title: str = None,
    version: str = None,
    description: str = None,
    tags: List[Dict[str, Any]] = None,
    components: Dict[str, Any] = None,
    servers: List[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Assemble a complete OpenAPI document for ``app``.

    Args:
        app: Flask application whose routes are documented
        title: info.title (defaults to Config.DOCS_TITLE)
        version: info.version (defaults to Config.DOCS_VERSION)
        description: Optional info.description
        tags: Top-level tag descriptions
        components: Shared schemas/responses referenced by shorthand refs
        servers: Server list (defaults to Config.DOCS_SERVER)

    Returns:
        OpenAPI document as a plain dict, ready for json.dumps
    """
    info = {
        'title': title or Config.DOCS_TITLE,
        'version': version or Config.DOCS_VERSION,
    }
    if description:
        info['description'] = description

    return {
        'openapi': Config.OPENAPI_VERSION,
        'info': info,
        'servers': servers if servers is not None else [{'url': Config.DOCS_SERVER}],
        'tags': tags or [],
        'paths': build_paths(app),
        'components': components or {},
    }
