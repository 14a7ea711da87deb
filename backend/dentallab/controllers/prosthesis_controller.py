"""
Prosthesis Controller - HTTP route handlers for the laboratory's prosthesis catalog.

Supports ``?type=`` and ``?material=`` list filters. When the application runs
with ``ALLOW_QUERY_LABORATORY_ID`` these routes also accept the caller
laboratory as a ``?laboratory_id=`` query parameter.
"""

import logging

from flask import Blueprint, jsonify, request

from dentallab.core.api_utils import get_json_body
from dentallab.core.auth_decorators import current_laboratory_id, laboratory_required
from dentallab.schemas.dtos import ProsthesisRequest, ProsthesisResponse
from dentallab.services.prosthesis_service import ProsthesisService
from dentallab.services.registry import get_registry

logger = logging.getLogger(__name__)

prosthesis_bp = Blueprint("prosthesis", __name__, url_prefix="/api/v1/prostheses")


def _get_prosthesis_service() -> ProsthesisService:
    return get_registry().prosthesis_service


@prosthesis_bp.route("", methods=["POST"])
@laboratory_required(allow_query_param=True)
def create_prosthesis():
    req = ProsthesisRequest.from_json(get_json_body())
    prosthesis = _get_prosthesis_service().create_prosthesis(
        laboratory_id=current_laboratory_id(),
        prosthesis_type=req.type,
        material=req.material,
        shade=req.shade,
        specifications=req.specifications,
        notes=req.notes,
    )
    return jsonify(ProsthesisResponse.from_domain(prosthesis).to_dict()), 201


@prosthesis_bp.route("", methods=["GET"])
@laboratory_required(allow_query_param=True)
def list_prostheses():
    prostheses = _get_prosthesis_service().list_prostheses(
        current_laboratory_id(),
        prosthesis_type=request.args.get("type", "").strip() or None,
        material=request.args.get("material", "").strip() or None,
    )
    return jsonify([ProsthesisResponse.from_domain(p).to_dict() for p in prostheses])


@prosthesis_bp.route("/<prosthesis_id>", methods=["GET"])
@laboratory_required(allow_query_param=True)
def get_prosthesis(prosthesis_id: str):
    prosthesis = _get_prosthesis_service().get_prosthesis(
        prosthesis_id, current_laboratory_id()
    )
    return jsonify(ProsthesisResponse.from_domain(prosthesis).to_dict())


@prosthesis_bp.route("/<prosthesis_id>", methods=["PUT"])
@laboratory_required(allow_query_param=True)
def update_prosthesis(prosthesis_id: str):
    req = ProsthesisRequest.from_json(get_json_body())
    prosthesis = _get_prosthesis_service().update_prosthesis(
        prosthesis_id,
        current_laboratory_id(),
        prosthesis_type=req.type,
        material=req.material,
        shade=req.shade,
        specifications=req.specifications,
        notes=req.notes,
    )
    return jsonify(ProsthesisResponse.from_domain(prosthesis).to_dict())


@prosthesis_bp.route("/<prosthesis_id>", methods=["DELETE"])
@laboratory_required(allow_query_param=True)
def delete_prosthesis(prosthesis_id: str):
    _get_prosthesis_service().delete_prosthesis(prosthesis_id, current_laboratory_id())
    return "", 204
