"""
Laboratory Controller - HTTP route handlers for laboratory (tenant) operations.

Following SOLID principles:
- Single Responsibility: Only handles HTTP request/response for laboratories
- Dependency Inversion: Depends on the service, not on storage

Any authenticated caller may sign up a laboratory and read laboratories;
only the laboratory itself (token ``laboratory_id`` claim) may update or
delete its profile.
"""

import logging

from flask import Blueprint, jsonify

from dentallab.core.api_utils import get_json_body
from dentallab.core.auth_decorators import current_laboratory_id, jwt_required
from dentallab.core.limiter_config import limiter
from dentallab.schemas.dtos import ContactRequest, LaboratoryResponse
from dentallab.services.laboratory_service import LaboratoryService
from dentallab.services.registry import get_registry

logger = logging.getLogger(__name__)

laboratory_bp = Blueprint("laboratory", __name__, url_prefix="/api/v1/laboratories")


def _get_laboratory_service() -> LaboratoryService:
    return get_registry().laboratory_service


@laboratory_bp.route("", methods=["POST"])
@limiter.limit("30 per minute")
@jwt_required
def create_laboratory():
    """Register a laboratory.

    Expected JSON payload:
    {
        "name": "Smile Lab",
        "email": "contact@smilelab.com",
        "phone": "+5511999999999",
        "address": {"street": "...", "city": "...", "state": "...",
                    "postal_code": "...", "country": "..."}
    }
    """
    req = ContactRequest.from_json(get_json_body())
    laboratory = _get_laboratory_service().create_laboratory(
        name=req.name, email=req.email, phone=req.phone, address=req.address
    )
    return jsonify(LaboratoryResponse.from_domain(laboratory).to_dict()), 201


@laboratory_bp.route("", methods=["GET"])
@jwt_required
def list_laboratories():
    laboratories = _get_laboratory_service().list_laboratories()
    return jsonify([LaboratoryResponse.from_domain(l).to_dict() for l in laboratories])


@laboratory_bp.route("/<laboratory_id>", methods=["GET"])
@jwt_required
def get_laboratory(laboratory_id: str):
    laboratory = _get_laboratory_service().get_laboratory(laboratory_id)
    return jsonify(LaboratoryResponse.from_domain(laboratory).to_dict())


@laboratory_bp.route("/<laboratory_id>", methods=["PUT"])
@jwt_required
def update_laboratory(laboratory_id: str):
    req = ContactRequest.from_json(get_json_body())
    laboratory = _get_laboratory_service().update_laboratory(
        laboratory_id=laboratory_id,
        caller_laboratory_id=current_laboratory_id(),
        name=req.name,
        email=req.email,
        phone=req.phone,
        address=req.address,
    )
    return jsonify(LaboratoryResponse.from_domain(laboratory).to_dict())


@laboratory_bp.route("/<laboratory_id>", methods=["DELETE"])
@jwt_required
def delete_laboratory(laboratory_id: str):
    _get_laboratory_service().delete_laboratory(
        laboratory_id, caller_laboratory_id=current_laboratory_id()
    )
    return "", 204
