"""Client repository implementation following SOLID principles.

Email lookups are scoped to one laboratory: the same address may belong to
clients of different laboratories.
"""

from typing import List, Optional

from dentallab.domain.entities import Client
from dentallab.domain.interfaces import IClientRepository
from dentallab.repositories.memory_store import InMemoryRepository


class ClientRepository(InMemoryRepository[Client], IClientRepository):
    """In-memory persistence for clients."""

    entity_name = "client"
    immutable_fields = ("laboratory_id",)

    def get_by_email(self, laboratory_id: str, email: str) -> Optional[Client]:
        return self._first(
            lambda client: client.laboratory_id == laboratory_id
            and client.email == email
        )

    def list_by_laboratory(self, laboratory_id: str) -> List[Client]:
        return self._select(lambda client: client.laboratory_id == laboratory_id)
