"""Technician repository implementation."""

from typing import List, Optional

from dentallab.domain.entities import Technician, TechnicianRole
from dentallab.domain.interfaces import ITechnicianRepository
from dentallab.repositories.memory_store import InMemoryRepository


class TechnicianRepository(InMemoryRepository[Technician], ITechnicianRepository):
    """In-memory persistence for technicians."""

    entity_name = "technician"
    immutable_fields = ("laboratory_id",)

    def get_by_email(self, laboratory_id: str, email: str) -> Optional[Technician]:
        return self._first(
            lambda tech: tech.laboratory_id == laboratory_id and tech.email == email
        )

    def list_by_laboratory(self, laboratory_id: str) -> List[Technician]:
        return self._select(lambda tech: tech.laboratory_id == laboratory_id)

    def list_by_role(
        self, laboratory_id: str, role: TechnicianRole
    ) -> List[Technician]:
        return self._select(
            lambda tech: tech.laboratory_id == laboratory_id and tech.role == role
        )
