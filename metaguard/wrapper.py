"""
@meta_guard decorator - applies a MetaGuard to a Flask route handler.

Usage:
    @app.route("/books/<book_id>", methods=["GET"])
    @meta_guard(
        tags=["Books"],
        summary="Get a book",
        annotateLocals="inputs",
        parameters={
            "book_id": {"in": "path", "required": True, "schema": {"type": "integer"}},
        },
    )
    def get_book(book_id):
        inputs = g.inputs  # Access validated params
        ...

The decorator:
1. Builds the guard (and its metadata) once, at decoration time
2. Adapts the Flask request into a RequestContext
3. Runs the guard; a rejection is raised into Flask's error handlers
4. Copies published locals onto flask.g
5. Calls the handler (awaited when it is a coroutine function)

Requires Flask async support (``flask[async]``).
"""

import functools
import inspect
from typing import Any, Callable, Mapping, Optional, Union

from flask import g, request

from .guard import MetaGuard
from .middleware.request_id import get_request_id
from .models import GuardConfig
from .sources import RequestContext


def _request_body() -> Mapping[str, Any]:
    """Parsed JSON object body, falling back to form data."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form


def build_request_context() -> RequestContext:
    """Adapt the active Flask request."""
    return RequestContext(
        path_params=request.view_args or {},
        query=request.args,
        headers=request.headers,
        cookies=request.cookies,
        body=_request_body(),
        request=request,
        request_id=get_request_id(),
    )


def meta_guard(config: Optional[Union[GuardConfig, Mapping[str, Any]]] = None, **props) -> Callable:
    """
    Decorator that validates declared request params before the handler runs.

    Args:
        config: A GuardConfig or its dict form; keyword arguments are used
            when omitted

    Returns:
        Decorator; the decorated view exposes ``meta_guard`` (the guard) and
        ``metadata`` (the config, or None when hidden)
    """
    guard = MetaGuard(config if config is not None else props)

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            context = build_request_context()

            async def call_next(error):
                if error is not None:
                    raise error
                for name, values in context.locals.items():
                    setattr(g, name, values)
                if inspect.iscoroutinefunction(fn):
                    return await fn(*args, **kwargs)
                return fn(*args, **kwargs)

            return await guard.handle(context, call_next)

        wrapper.meta_guard = guard
        wrapper.metadata = guard.metadata
        return wrapper
    return decorator
