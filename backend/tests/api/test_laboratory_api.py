"""
API tests for /api/v1/laboratories.
"""

import pytest

from tests.factories.entity_factories import address_payload


@pytest.fixture
def created_lab(client, auth_headers, lab_payload):
    response = client.post(
        "/api/v1/laboratories", json=lab_payload, headers=auth_headers()
    )
    assert response.status_code == 201
    return response.get_json()


class TestLaboratoryEndpoints:
    def test_signup_without_laboratory_claim(self, created_lab):
        assert created_lab["name"] == "Smile Lab"
        assert created_lab["address"]["postal_code"] == "01000-000"
        assert created_lab["id"]
        assert "deleted_at" not in created_lab

    def test_signup_requires_token(self, client, lab_payload):
        response = client.post("/api/v1/laboratories", json=lab_payload)
        assert response.status_code == 401

    def test_signup_validation_details(self, client, auth_headers):
        response = client.post(
            "/api/v1/laboratories",
            json={"name": "", "email": "bad", "phone": "1", "address": address_payload(city="")},
            headers=auth_headers(),
        )

        body = response.get_json()
        assert response.status_code == 400
        assert body["error"] == "validation failed"
        assert body["details"] == {
            "name": "name is required",
            "email": "invalid email format",
            "phone": "invalid phone format",
            "address.city": "address.city is required",
        }

    def test_signup_with_taken_email(self, client, auth_headers, created_lab, lab_payload):
        response = client.post(
            "/api/v1/laboratories", json=lab_payload, headers=auth_headers()
        )
        assert response.status_code == 409
        assert response.get_json() == {"error": "email already exists"}

    def test_malformed_body(self, client, auth_headers):
        response = client.post(
            "/api/v1/laboratories",
            data="{not json",
            content_type="application/json",
            headers=auth_headers(),
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "invalid request body"}

    def test_get_and_list(self, client, auth_headers, created_lab):
        listed = client.get("/api/v1/laboratories", headers=auth_headers())
        fetched = client.get(
            f"/api/v1/laboratories/{created_lab['id']}", headers=auth_headers()
        )

        assert listed.status_code == 200
        assert [lab["id"] for lab in listed.get_json()] == [created_lab["id"]]
        assert fetched.get_json()["email"] == "contact@smilelab.com"

    def test_get_missing(self, client, auth_headers):
        response = client.get("/api/v1/laboratories/missing", headers=auth_headers())
        assert response.status_code == 404
        assert response.get_json() == {"error": "resource not found"}

    def test_update_by_itself(self, client, auth_headers, created_lab, lab_payload):
        lab_payload["name"] = "Smile Lab Premium"
        response = client.put(
            f"/api/v1/laboratories/{created_lab['id']}",
            json=lab_payload,
            headers=auth_headers(laboratory_id=created_lab["id"]),
        )

        assert response.status_code == 200
        assert response.get_json()["name"] == "Smile Lab Premium"

    def test_update_without_matching_claim_is_not_found(
        self, client, auth_headers, created_lab, lab_payload
    ):
        response = client.put(
            f"/api/v1/laboratories/{created_lab['id']}",
            json=lab_payload,
            headers=auth_headers(laboratory_id="another-lab"),
        )
        assert response.status_code == 404

    def test_delete(self, client, auth_headers, created_lab):
        headers = auth_headers(laboratory_id=created_lab["id"])
        url = f"/api/v1/laboratories/{created_lab['id']}"

        assert client.delete(url, headers=headers).status_code == 204
        assert client.get(url, headers=headers).status_code == 404
        assert client.delete(url, headers=headers).status_code == 404
