"""Laboratory repository implementation following SOLID principles."""

from typing import List, Optional

from dentallab.domain.entities import Laboratory
from dentallab.domain.interfaces import ILaboratoryRepository
from dentallab.repositories.memory_store import InMemoryRepository


class LaboratoryRepository(InMemoryRepository[Laboratory], ILaboratoryRepository):
    """In-memory persistence for laboratories (the tenants)."""

    entity_name = "laboratory"

    def get_by_email(self, email: str) -> Optional[Laboratory]:
        return self._first(lambda lab: lab.email == email)

    def list_all(self) -> List[Laboratory]:
        return self._select(lambda lab: True)
