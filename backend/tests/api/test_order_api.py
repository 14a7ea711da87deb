"""
API tests for /api/v1/orders and the status workflow endpoint.
"""

import pytest

from tests.factories.entity_factories import address_payload, item_payload


@pytest.fixture
def headers_a(auth_headers, lab_a):
    return auth_headers(laboratory_id=lab_a.id)


@pytest.fixture
def headers_b(auth_headers, lab_b):
    return auth_headers(laboratory_id=lab_b.id)


@pytest.fixture
def client_id(client, headers_a):
    response = client.post(
        "/api/v1/clients",
        json={
            "name": "Clinica Sorriso",
            "email": "dr.ana@sorriso.com",
            "phone": "+5511988887777",
            "address": address_payload(),
        },
        headers=headers_a,
    )
    return response.get_json()["id"]


@pytest.fixture
def order(client, headers_a, client_id):
    response = client.post(
        "/api/v1/orders",
        json={"client_id": client_id, "prosthesis": [item_payload()]},
        headers=headers_a,
    )
    assert response.status_code == 201
    return response.get_json()


def _set_status(client, order_id, status, headers):
    return client.patch(
        f"/api/v1/orders/{order_id}/status", json={"status": status}, headers=headers
    )


class TestOrderEndpoints:
    def test_created_order(self, order, client_id, lab_a):
        assert order["status"] == "received"
        assert order["client_id"] == client_id
        assert order["laboratory_id"] == lab_a.id
        assert order["prosthesis"][0]["type"] == "crown"

    def test_order_for_foreign_client_is_not_found(self, client, headers_b, client_id):
        response = client.post(
            "/api/v1/orders",
            json={"client_id": client_id, "prosthesis": [item_payload()]},
            headers=headers_b,
        )
        assert response.status_code == 404

    def test_order_without_items(self, client, headers_a, client_id):
        response = client.post(
            "/api/v1/orders", json={"client_id": client_id, "prosthesis": []},
            headers=headers_a,
        )
        assert response.status_code == 400
        assert response.get_json()["details"] == {
            "prosthesis": "at least one prosthesis item is required"
        }

    def test_order_with_zero_quantity(self, client, headers_a, client_id):
        response = client.post(
            "/api/v1/orders",
            json={"client_id": client_id, "prosthesis": [item_payload(quantity=0)]},
            headers=headers_a,
        )
        assert response.status_code == 400
        assert response.get_json()["details"] == {
            "prosthesis[0].quantity": "quantity must be greater than 0"
        }

    def test_valid_transition(self, client, headers_a, order):
        response = _set_status(client, order["id"], "in_production", headers_a)

        assert response.status_code == 200
        assert response.get_json()["status"] == "in_production"

    def test_invalid_transition(self, client, headers_a, order):
        response = _set_status(client, order["id"], "delivered", headers_a)

        assert response.status_code == 400
        assert response.get_json() == {"error": "invalid status transition"}

    def test_unknown_status(self, client, headers_a, order):
        response = _set_status(client, order["id"], "shipped", headers_a)

        assert response.status_code == 400
        assert response.get_json() == {"error": "invalid status value"}

    def test_missing_status(self, client, headers_a, order):
        response = client.patch(
            f"/api/v1/orders/{order['id']}/status", json={}, headers=headers_a
        )
        assert response.status_code == 400
        assert response.get_json()["details"] == {"status": "status is required"}

    def test_cross_tenant_status_change(self, client, headers_a, headers_b, order):
        response = _set_status(client, order["id"], "in_production", headers_b)

        assert response.status_code == 404
        fetched = client.get(f"/api/v1/orders/{order['id']}", headers=headers_a)
        assert fetched.get_json()["status"] == "received"

    def test_update_items(self, client, headers_a, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}",
            json={"prosthesis": [item_payload(material="emax", quantity=2)]},
            headers=headers_a,
        )

        assert response.status_code == 200
        assert response.get_json()["prosthesis"] == [
            {"type": "crown", "material": "emax", "shade": "A2", "quantity": 2, "notes": ""}
        ]

    def test_list_and_client_orders(self, client, headers_a, headers_b, order, client_id):
        own = client.get("/api/v1/orders", headers=headers_a).get_json()
        other = client.get("/api/v1/orders", headers=headers_b).get_json()
        by_client = client.get(
            f"/api/v1/clients/{client_id}/orders", headers=headers_a
        ).get_json()

        assert [o["id"] for o in own] == [order["id"]]
        assert other == []
        assert [o["id"] for o in by_client] == [order["id"]]

    def test_delete(self, client, headers_a, order):
        url = f"/api/v1/orders/{order['id']}"

        assert client.delete(url, headers=headers_a).status_code == 204
        assert client.get(url, headers=headers_a).status_code == 404
        assert client.delete(url, headers=headers_a).status_code == 404
