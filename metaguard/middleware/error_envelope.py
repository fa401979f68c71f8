"""
Error envelope middleware - Standardize guard and error responses.

Provides consistent error response format:
{
    "error": {
        "code": "INVALID_PARAMS",
        "message": "Invalid param 'page' in query: must be >= 1",
        "requestId": "uuid",
        "field": "page",
        "source": "query"
    }
}
"""

import logging
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException

from ..config import Config
from ..errors import InvalidParameterError


logger = logging.getLogger('metaguard.middleware.error')


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Handles:
    - InvalidParameterError raised by guarded routes (406)
    - HTTP exceptions (400, 404, 500, etc.)
    - Unhandled Python exceptions

    Args:
        app: Flask application instance
    """

    @app.errorhandler(InvalidParameterError)
    def handle_invalid_param(error):
        """Handle guard rejections."""
        request_id = getattr(g, 'request_id', None)

        body = error.to_dict()
        body["requestId"] = request_id
        response = jsonify({"error": body})

        if request_id:
            response.headers[Config.REQUEST_ID_HEADER] = request_id

        return response, error.status

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions."""
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return make_error_response(code, error.description, status_code=error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        request_id = getattr(g, 'request_id', None)

        # Log the full exception
        logger.exception(
            f"Unhandled error: {error}",
            extra={
                "event": "unhandled_error",
                "request_id": request_id,
                "error_type": type(error).__name__,
            }
        )

        return make_error_response("INTERNAL_ERROR", "An unexpected error occurred")


# Error codes reference
ERROR_CODES = {
    "BAD_REQUEST": 400,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "INVALID_PARAMS": InvalidParameterError.status,
    "INTERNAL_ERROR": 500,
}


def make_error_response(
    code: str,
    message: str,
    status_code: int = None,
    field: str = None,
    details: dict = None,
):
    """
    Create a standardized error response.

    Args:
        code: Error code (e.g., "INVALID_PARAMS")
        message: Human-readable error message
        status_code: HTTP status code (defaults based on error code)
        field: Optional field name that caused the error
        details: Optional additional details dict

    Returns:
        Tuple of (response, status_code)
    """
    request_id = getattr(g, 'request_id', None)

    if status_code is None:
        status_code = ERROR_CODES.get(code, 500)

    error = {
        "error": {
            "code": code,
            "message": message,
            "requestId": request_id,
        }
    }

    if field:
        error["error"]["field"] = field
    if details:
        error["error"]["details"] = details

    response = jsonify(error)
    if request_id:
        response.headers[Config.REQUEST_ID_HEADER] = request_id

    return response, status_code
