"""
Common API utilities for consistent request parsing and error formatting
across all controllers.
"""

from typing import Any, Dict, Optional

from flask import abort, jsonify, request

INVALID_BODY_MESSAGE = "invalid request body"


def error_response(
    message: str, status_code: int, details: Optional[Dict[str, str]] = None
) -> tuple:
    """
    Standardized error format for all endpoints.

    Returns:
        Tuple of (json_response, status_code)
    """
    body: Dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return jsonify(body), status_code


def get_json_body() -> Dict[str, Any]:
    """Return the request JSON object, aborting with 400 when it is missing,
    malformed, or not an object."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description=INVALID_BODY_MESSAGE)
    return payload
