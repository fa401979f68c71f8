"""
Flask middleware for guarded applications.
"""

from flask import Flask

from .error_envelope import setup_error_handlers, make_error_response, ERROR_CODES
from .request_id import setup_request_id_middleware, get_request_id


def init_app(app: Flask) -> None:
    """Install request ID injection and the JSON error envelope."""
    setup_request_id_middleware(app)
    setup_error_handlers(app)


__all__ = [
    'init_app',
    'setup_error_handlers',
    'setup_request_id_middleware',
    'make_error_response',
    'get_request_id',
    'ERROR_CODES',
]
