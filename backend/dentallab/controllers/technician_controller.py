"""
Technician Controller - HTTP route handlers for laboratory technicians.
"""

import logging

from flask import Blueprint, jsonify, request

from dentallab.core.api_utils import get_json_body
from dentallab.core.auth_decorators import current_laboratory_id, laboratory_required
from dentallab.schemas.dtos import TechnicianRequest, TechnicianResponse
from dentallab.services.registry import get_registry
from dentallab.services.technician_service import TechnicianService

logger = logging.getLogger(__name__)

technician_bp = Blueprint("technician", __name__, url_prefix="/api/v1/technicians")


def _get_technician_service() -> TechnicianService:
    return get_registry().technician_service


@technician_bp.route("", methods=["POST"])
@laboratory_required(allow_query_param=True)
def create_technician():
    """Add a technician to the caller's laboratory.

    Expected JSON payload:
    {
        "name": "Ana Souza",
        "email": "ana@smilelab.com",
        "phone": "+5511988887777",
        "role": "senior_technician",
        "specializations": ["ceramics", "implants"]
    }
    """
    req = TechnicianRequest.from_json(get_json_body())
    technician = _get_technician_service().create_technician(
        laboratory_id=current_laboratory_id(),
        name=req.name,
        email=req.email,
        phone=req.phone,
        role=req.role,
        specializations=req.specializations,
    )
    return jsonify(TechnicianResponse.from_domain(technician).to_dict()), 201


@technician_bp.route("", methods=["GET"])
@laboratory_required(allow_query_param=True)
def list_technicians():
    technicians = _get_technician_service().list_technicians(
        current_laboratory_id(),
        role=request.args.get("role", "").strip() or None,
    )
    return jsonify([TechnicianResponse.from_domain(t).to_dict() for t in technicians])


@technician_bp.route("/<technician_id>", methods=["GET"])
@laboratory_required(allow_query_param=True)
def get_technician(technician_id: str):
    technician = _get_technician_service().get_technician(
        technician_id, current_laboratory_id()
    )
    return jsonify(TechnicianResponse.from_domain(technician).to_dict())


@technician_bp.route("/<technician_id>", methods=["PUT"])
@laboratory_required(allow_query_param=True)
def update_technician(technician_id: str):
    req = TechnicianRequest.from_json(get_json_body())
    technician = _get_technician_service().update_technician(
        technician_id,
        current_laboratory_id(),
        name=req.name,
        email=req.email,
        phone=req.phone,
        role=req.role,
        specializations=req.specializations,
    )
    return jsonify(TechnicianResponse.from_domain(technician).to_dict())


@technician_bp.route("/<technician_id>", methods=["DELETE"])
@laboratory_required(allow_query_param=True)
def delete_technician(technician_id: str):
    _get_technician_service().delete_technician(technician_id, current_laboratory_id())
    return "", 204
