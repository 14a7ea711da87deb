"""
Health controller - liveness endpoint for monitoring.
"""

from flask import Blueprint, jsonify

from dentallab.core.limiter_config import limiter

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health_check():
    """Public liveness probe. No authentication required."""
    return jsonify({"status": "ok"}), 200
