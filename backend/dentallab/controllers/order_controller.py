"""
Order Controller - HTTP route handlers for work orders and their status workflow.
"""

import logging

from flask import Blueprint, jsonify

from dentallab.core.api_utils import get_json_body
from dentallab.core.auth_decorators import current_laboratory_id, laboratory_required
from dentallab.schemas.dtos import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusRequest,
    OrderUpdateRequest,
)
from dentallab.services.order_service import OrderService
from dentallab.services.registry import get_registry

logger = logging.getLogger(__name__)

order_bp = Blueprint("order", __name__, url_prefix="/api/v1/orders")


def _get_order_service() -> OrderService:
    return get_registry().order_service


@order_bp.route("", methods=["POST"])
@laboratory_required()
def create_order():
    """Create an order for a client of the caller's laboratory.

    Expected JSON payload:
    {
        "client_id": "<uuid>",
        "prosthesis": [
            {"type": "crown", "material": "zirconia", "shade": "A2",
             "quantity": 1, "notes": ""}
        ]
    }
    """
    req = OrderCreateRequest.from_json(get_json_body())
    order = _get_order_service().create_order(
        client_id=req.client_id,
        laboratory_id=current_laboratory_id(),
        prosthesis=req.prosthesis,
    )
    return jsonify(OrderResponse.from_domain(order).to_dict()), 201


@order_bp.route("", methods=["GET"])
@laboratory_required()
def list_orders():
    orders = _get_order_service().list_orders(current_laboratory_id())
    return jsonify([OrderResponse.from_domain(o).to_dict() for o in orders])


@order_bp.route("/<order_id>", methods=["GET"])
@laboratory_required()
def get_order(order_id: str):
    order = _get_order_service().get_order(order_id, current_laboratory_id())
    return jsonify(OrderResponse.from_domain(order).to_dict())


@order_bp.route("/<order_id>", methods=["PUT"])
@laboratory_required()
def update_order(order_id: str):
    """Replace the line items of an order. The status is not touched."""
    req = OrderUpdateRequest.from_json(get_json_body())
    order = _get_order_service().update_order(
        order_id, current_laboratory_id(), req.prosthesis
    )
    return jsonify(OrderResponse.from_domain(order).to_dict())


@order_bp.route("/<order_id>/status", methods=["PATCH"])
@laboratory_required()
def update_order_status(order_id: str):
    """Move an order to ``{"status": "<target>"}`` if the workflow allows it."""
    req = OrderStatusRequest.from_json(get_json_body())
    order = _get_order_service().update_order_status(
        order_id, current_laboratory_id(), req.status
    )
    return jsonify(OrderResponse.from_domain(order).to_dict())


@order_bp.route("/<order_id>", methods=["DELETE"])
@laboratory_required()
def delete_order(order_id: str):
    _get_order_service().delete_order(order_id, current_laboratory_id())
    return "", 204
