"""Order repository implementation following SOLID principles."""

from typing import List

from dentallab.domain.entities import Order
from dentallab.domain.interfaces import IOrderRepository
from dentallab.repositories.memory_store import InMemoryRepository


class OrderRepository(InMemoryRepository[Order], IOrderRepository):
    """In-memory persistence for work orders. Line items are stored by value."""

    entity_name = "order"
    immutable_fields = ("laboratory_id", "client_id")

    def list_by_laboratory(self, laboratory_id: str) -> List[Order]:
        return self._select(lambda order: order.laboratory_id == laboratory_id)

    def list_by_client(self, client_id: str) -> List[Order]:
        return self._select(lambda order: order.client_id == client_id)
