"""Prosthesis catalog repository implementation."""

from typing import List

from dentallab.domain.entities import Prosthesis, ProsthesisType
from dentallab.domain.interfaces import IProsthesisRepository
from dentallab.repositories.memory_store import InMemoryRepository


class ProsthesisRepository(InMemoryRepository[Prosthesis], IProsthesisRepository):
    """In-memory persistence for the prosthesis catalog."""

    entity_name = "prosthesis"
    immutable_fields = ("laboratory_id",)

    def list_by_laboratory(self, laboratory_id: str) -> List[Prosthesis]:
        return self._select(lambda item: item.laboratory_id == laboratory_id)

    def find_by_type(
        self, laboratory_id: str, prosthesis_type: ProsthesisType
    ) -> List[Prosthesis]:
        return self._select(
            lambda item: item.laboratory_id == laboratory_id
            and item.type == prosthesis_type
        )

    def find_by_material(self, laboratory_id: str, material: str) -> List[Prosthesis]:
        wanted = material.casefold()
        return self._select(
            lambda item: item.laboratory_id == laboratory_id
            and item.material.casefold() == wanted
        )
