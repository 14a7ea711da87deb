"""
End-to-end flows through the HTTP layer and the in-memory storage.
"""

import threading

import pytest

from dentallab.core.exceptions import InvalidStatusTransitionError, NotFoundError
from dentallab.domain.workflow import OrderStatus
from dentallab.services.registry import build_in_memory_registry
from tests.factories.entity_factories import (
    address_payload,
    item_payload,
    make_address,
    make_item,
)


def _contact(name, email):
    return {
        "name": name,
        "email": email,
        "phone": "+5511912345678",
        "address": address_payload(),
    }


class TestOrderLifecycle:
    def test_laboratory_to_delivered_order(self, client, auth_headers):
        signup = client.post(
            "/api/v1/laboratories",
            json=_contact("Smile Lab", "contact@smilelab.com"),
            headers=auth_headers(),
        )
        assert signup.status_code == 201
        lab_headers = auth_headers(laboratory_id=signup.get_json()["id"])

        clinic = client.post(
            "/api/v1/clients",
            json=_contact("Clinica Sorriso", "dr.ana@sorriso.com"),
            headers=lab_headers,
        ).get_json()
        order = client.post(
            "/api/v1/orders",
            json={
                "client_id": clinic["id"],
                "prosthesis": [item_payload(), item_payload(type="bridge", quantity=3)],
            },
            headers=lab_headers,
        ).get_json()
        assert order["status"] == "received"

        path = ["in_production", "quality_check", "revision", "in_production",
                "quality_check", "ready", "delivered"]
        for status in path:
            response = client.patch(
                f"/api/v1/orders/{order['id']}/status",
                json={"status": status},
                headers=lab_headers,
            )
            assert response.status_code == 200, status
            assert response.get_json()["status"] == status

        reopened = client.patch(
            f"/api/v1/orders/{order['id']}/status",
            json={"status": "revision"},
            headers=lab_headers,
        )
        assert reopened.status_code == 400

        history = client.get(
            f"/api/v1/clients/{clinic['id']}/orders", headers=lab_headers
        ).get_json()
        assert [o["status"] for o in history] == ["delivered"]
        assert len(history[0]["prosthesis"]) == 2

    def test_second_laboratory_sees_nothing(self, client, auth_headers):
        first = client.post(
            "/api/v1/laboratories",
            json=_contact("Lab One", "one@labs.com"),
            headers=auth_headers(),
        ).get_json()
        second = client.post(
            "/api/v1/laboratories",
            json=_contact("Lab Two", "two@labs.com"),
            headers=auth_headers(user_id="user-2"),
        ).get_json()
        one = auth_headers(laboratory_id=first["id"])
        two = auth_headers(laboratory_id=second["id"], user_id="user-2")

        clinic = client.post(
            "/api/v1/clients", json=_contact("Clinic", "clinic@mail.com"), headers=one
        ).get_json()
        order = client.post(
            "/api/v1/orders",
            json={"client_id": clinic["id"], "prosthesis": [item_payload()]},
            headers=one,
        ).get_json()

        for url in [
            f"/api/v1/clients/{clinic['id']}",
            f"/api/v1/clients/{clinic['id']}/orders",
            f"/api/v1/orders/{order['id']}",
        ]:
            assert client.get(url, headers=two).status_code == 404
        assert client.get("/api/v1/orders", headers=two).get_json() == []

        # Laboratory profiles are readable by any authenticated caller.
        assert client.get(
            f"/api/v1/laboratories/{first['id']}", headers=two
        ).status_code == 200
        assert client.delete(
            f"/api/v1/laboratories/{first['id']}", headers=two
        ).status_code == 404


class TestConcurrentServiceCalls:
    @pytest.fixture
    def services(self):
        return build_in_memory_registry()

    @pytest.fixture
    def laboratory(self, services):
        return services.laboratory_service.create_laboratory(
            name="Busy Lab", email="busy@lab.com", phone="+5511900000000",
            address=make_address(),
        )

    def test_parallel_order_creation(self, services, laboratory):
        clinic = services.client_service.create_client(
            laboratory_id=laboratory.id,
            name="Clinic",
            email="clinic@mail.com",
            phone="+5511911111111",
            address=make_address(),
        )
        errors = []

        def worker():
            try:
                services.order_service.create_order(
                    clinic.id, laboratory.id, [make_item()]
                )
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(40)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        orders = services.order_service.list_orders_by_client(clinic.id, laboratory.id)
        assert len(orders) == 40
        assert len({o.id for o in orders}) == 40

    def test_parallel_status_changes_never_skip_the_workflow(self, services, laboratory):
        clinic = services.client_service.create_client(
            laboratory_id=laboratory.id,
            name="Clinic",
            email="clinic@mail.com",
            phone="+5511911111111",
            address=make_address(),
        )
        order = services.order_service.create_order(
            clinic.id, laboratory.id, [make_item()]
        )
        barrier = threading.Barrier(10)
        rejected = []

        def worker():
            barrier.wait()
            try:
                services.order_service.update_order_status(
                    order.id, laboratory.id, "in_production"
                )
            except InvalidStatusTransitionError:
                rejected.append(True)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stored = services.order_service.get_order(order.id, laboratory.id)
        assert stored.status == OrderStatus.IN_PRODUCTION
        assert len(rejected) == 9

    def test_reads_during_deletes(self, services, laboratory):
        created = [
            services.prosthesis_service.create_prosthesis(
                laboratory.id, "crown", f"Material {i}"
            )
            for i in range(30)
        ]
        missing = []

        def deleter():
            for prosthesis in created:
                services.prosthesis_service.delete_prosthesis(prosthesis.id, laboratory.id)

        def reader():
            for prosthesis in created:
                try:
                    services.prosthesis_service.get_prosthesis(prosthesis.id, laboratory.id)
                except NotFoundError:
                    missing.append(prosthesis.id)

        threads = [threading.Thread(target=deleter), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert services.prosthesis_service.list_prostheses(laboratory.id) == []
        assert set(missing) <= {p.id for p in created}
