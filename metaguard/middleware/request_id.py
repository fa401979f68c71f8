"""
Request ID middleware - correlates guard rejections with client requests.

The ID is taken from the incoming request header (METAGUARD_REQUEST_ID_HEADER,
default X-Request-ID) or generated, stored on ``g.request_id`` and echoed on
every response. Guarded views copy it into their RequestContext so rejection
logs and error envelopes carry the same value.
"""

import uuid
from typing import Optional

from flask import Flask, request, g

from ..config import Config


def setup_request_id_middleware(app: Flask) -> None:
    """
    Set up request ID middleware on Flask app.

    Args:
        app: Flask application instance
    """
    header = Config.REQUEST_ID_HEADER

    @app.before_request
    def inject_request_id():
        g.request_id = request.headers.get(header) or str(uuid.uuid4())

    @app.after_request
    def echo_request_id(response):
        request_id = get_request_id()
        if request_id:
            response.headers[header] = request_id
        return response


def get_request_id() -> Optional[str]:
    """Current request ID, or None when the middleware is not installed."""
    return getattr(g, 'request_id', None)
