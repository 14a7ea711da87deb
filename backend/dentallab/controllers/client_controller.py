"""
Client controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Depends on service abstractions (Dependency Inversion)
- Always passes the caller's laboratory from the token to the service
"""

import logging

from flask import Blueprint, jsonify

from dentallab.core.api_utils import get_json_body
from dentallab.core.auth_decorators import current_laboratory_id, laboratory_required
from dentallab.schemas.dtos import ClientResponse, ContactRequest, OrderResponse
from dentallab.services.client_service import ClientService
from dentallab.services.order_service import OrderService
from dentallab.services.registry import get_registry

logger = logging.getLogger(__name__)

client_bp = Blueprint("client", __name__, url_prefix="/api/v1/clients")


def _get_client_service() -> ClientService:
    return get_registry().client_service


def _get_order_service() -> OrderService:
    return get_registry().order_service


@client_bp.route("", methods=["POST"])
@laboratory_required()
def create_client():
    req = ContactRequest.from_json(get_json_body())
    client = _get_client_service().create_client(
        laboratory_id=current_laboratory_id(),
        name=req.name,
        email=req.email,
        phone=req.phone,
        address=req.address,
    )
    return jsonify(ClientResponse.from_domain(client).to_dict()), 201


@client_bp.route("", methods=["GET"])
@laboratory_required()
def list_clients():
    clients = _get_client_service().list_clients(current_laboratory_id())
    return jsonify([ClientResponse.from_domain(c).to_dict() for c in clients])


@client_bp.route("/<client_id>", methods=["GET"])
@laboratory_required()
def get_client(client_id: str):
    client = _get_client_service().get_client(client_id, current_laboratory_id())
    return jsonify(ClientResponse.from_domain(client).to_dict())


@client_bp.route("/<client_id>", methods=["PUT"])
@laboratory_required()
def update_client(client_id: str):
    req = ContactRequest.from_json(get_json_body())
    client = _get_client_service().update_client(
        client_id=client_id,
        laboratory_id=current_laboratory_id(),
        name=req.name,
        email=req.email,
        phone=req.phone,
        address=req.address,
    )
    return jsonify(ClientResponse.from_domain(client).to_dict())


@client_bp.route("/<client_id>", methods=["DELETE"])
@laboratory_required()
def delete_client(client_id: str):
    _get_client_service().delete_client(client_id, current_laboratory_id())
    return "", 204


@client_bp.route("/<client_id>/orders", methods=["GET"])
@laboratory_required()
def list_client_orders(client_id: str):
    """List the orders of one client of the caller's laboratory."""
    orders = _get_order_service().list_orders_by_client(
        client_id, current_laboratory_id()
    )
    return jsonify([OrderResponse.from_domain(o).to_dict() for o in orders])
