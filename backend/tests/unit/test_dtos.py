"""Unit tests for request parsing and response mapping."""

import pytest

from dentallab.core.exceptions import ValidationError
from dentallab.domain.workflow import OrderStatus
from dentallab.schemas.dtos import (
    ContactRequest,
    OrderCreateRequest,
    OrderResponse,
    OrderStatusRequest,
    TechnicianRequest,
    TechnicianResponse,
)
from tests.factories.entity_factories import address_payload, make_order, make_technician


class TestRequests:
    def test_contact_request_trims_and_defaults(self):
        req = ContactRequest.from_json(
            {"name": "  Smile Lab ", "email": "a@b.com", "address": address_payload()}
        )

        assert req.name == "Smile Lab"
        assert req.phone == ""
        assert req.address.city == "Sao Paulo"

    def test_missing_address_becomes_blank_address(self):
        req = ContactRequest.from_json({"name": "x"})
        assert req.address.street == ""

    def test_order_request_parses_items(self):
        req = OrderCreateRequest.from_json(
            {
                "client_id": "c-1",
                "prosthesis": [{"type": "crown", "material": "zirconia", "quantity": 2}],
            }
        )

        assert req.client_id == "c-1"
        assert req.prosthesis[0].quantity == 2
        assert req.prosthesis[0].shade == ""

    def test_order_request_without_items(self):
        assert OrderCreateRequest.from_json({"client_id": "c-1"}).prosthesis == []

    def test_order_request_with_non_list_items(self):
        with pytest.raises(ValidationError) as exc_info:
            OrderCreateRequest.from_json({"client_id": "c-1", "prosthesis": "crown"})
        assert exc_info.value.fields == ["prosthesis"]

    def test_order_request_with_non_object_item(self):
        with pytest.raises(ValidationError) as exc_info:
            OrderCreateRequest.from_json({"prosthesis": [{"type": "crown"}, 3]})
        assert exc_info.value.fields == ["prosthesis[1]"]

    def test_status_is_required(self):
        with pytest.raises(ValidationError):
            OrderStatusRequest.from_json({})

    def test_specializations_must_be_a_list(self):
        with pytest.raises(ValidationError):
            TechnicianRequest.from_json({"specializations": "ceramics"})


class TestResponses:
    def test_order_response(self):
        data = OrderResponse.from_domain(make_order(status=OrderStatus.READY)).to_dict()

        assert data["status"] == "ready"
        assert data["laboratory_id"] == "lab-1"
        assert data["prosthesis"][0]["material"] == "zirconia"
        assert data["created_at"].endswith("+00:00")

    def test_technician_response(self):
        data = TechnicianResponse.from_domain(make_technician()).to_dict()

        assert data["role"] == "technician"
        assert data["specializations"] == ["ceramics"]
        assert "deleted_at" not in data
