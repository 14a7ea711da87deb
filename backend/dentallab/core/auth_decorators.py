"""
Authentication helpers for the API.

Callers authenticate with a JWT bearer token. Two claims matter:

- ``sub``: the user id, exposed as ``g.user_id``
- ``laboratory_id``: the tenant the caller acts as, exposed as ``g.laboratory_id``

DECORATOR GUIDE:
- @jwt_required: any valid token (laboratory signup, laboratory reads)
- @laboratory_required(): valid token that carries a ``laboratory_id`` claim
- @laboratory_required(allow_query_param=True): same, but when the app runs
  with ``ALLOW_QUERY_LABORATORY_ID`` a ``?laboratory_id=`` query parameter is
  accepted in place of a token

Examples:
    @client_bp.route("", methods=["GET"])
    @laboratory_required()
    def list_clients():
        return jsonify(service.list_clients(current_laboratory_id()))
"""

import logging
from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, request

from dentallab.core.exceptions import ForbiddenError, UnauthorizedError
from dentallab.core.security import LABORATORY_CLAIM, decode_access_token

logger = logging.getLogger(__name__)


def _authenticate() -> None:
    """Decode the bearer token into ``g``.

    Raises:
        UnauthorizedError: missing or malformed header, or a bad token.
    """
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError("missing or invalid authorization header")

    payload: Optional[Dict[str, Any]] = decode_access_token(
        parts[1],
        secret=current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )
    if not payload or not payload.get("sub"):
        logger.info(
            "Rejected bearer token",
            extra={"context": {"path": request.path}},
        )
        raise UnauthorizedError("invalid or expired token")

    g.user_id = str(payload["sub"])
    g.laboratory_id = payload.get(LABORATORY_CLAIM) or None


def jwt_required(f):
    """Decorator to require a valid JWT. Raises UnauthorizedError (401) otherwise."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        _authenticate()
        return f(*args, **kwargs)

    return decorated_function


def laboratory_required(allow_query_param: bool = False):
    """Decorator factory requiring a caller laboratory.

    Raises UnauthorizedError (401) without valid credentials and
    ForbiddenError (403) when the token lacks the ``laboratory_id`` claim.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            query_laboratory_id = request.args.get("laboratory_id", "").strip()
            if (
                allow_query_param
                and current_app.config.get("ALLOW_QUERY_LABORATORY_ID", False)
                and query_laboratory_id
                and "Authorization" not in request.headers
            ):
                g.user_id = None
                g.laboratory_id = query_laboratory_id
                return f(*args, **kwargs)

            _authenticate()
            if not g.laboratory_id:
                logger.warning(
                    "Token without laboratory claim",
                    extra={"context": {"user_id": g.user_id, "path": request.path}},
                )
                raise ForbiddenError("missing laboratory_id claim")
            return f(*args, **kwargs)

        return decorated_function

    return decorator


def current_laboratory_id() -> Optional[str]:
    return g.get("laboratory_id")
