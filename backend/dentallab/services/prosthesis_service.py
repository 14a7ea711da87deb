"""Prosthesis catalog service: laboratory-scoped CRUD with optional list filters."""

import logging
from typing import List, Optional, Union

from dentallab.core.exceptions import NotFoundError, ValidationError
from dentallab.domain.entities import Prosthesis, ProsthesisType
from dentallab.domain.interfaces import (
    IIdGenerator,
    ILaboratoryRepository,
    IProsthesisRepository,
)
from dentallab.services.storage_errors import translate_storage_errors
from dentallab.services.tenancy import ensure_owned

logger = logging.getLogger(__name__)


def parse_prosthesis_type(value: Union[ProsthesisType, str]) -> ProsthesisType:
    """Convert a wire value to ProsthesisType or raise a field ValidationError."""
    if isinstance(value, ProsthesisType):
        return value
    try:
        return ProsthesisType(str(value).strip())
    except ValueError:
        raise ValidationError.single("type", "invalid prosthesis type") from None


class ProsthesisService:
    """Application service for the prosthesis catalog."""

    def __init__(
        self,
        prosthesis_repo: IProsthesisRepository,
        laboratory_repo: ILaboratoryRepository,
        id_generator: IIdGenerator,
    ) -> None:
        self.prosthesis_repo = prosthesis_repo
        self.laboratory_repo = laboratory_repo
        self.id_generator = id_generator

    def create_prosthesis(
        self,
        laboratory_id: str,
        prosthesis_type: Union[ProsthesisType, str],
        material: str,
        shade: str = "",
        specifications: str = "",
        notes: str = "",
    ) -> Prosthesis:
        with translate_storage_errors("create_prosthesis"):
            if self.laboratory_repo.get_by_id(laboratory_id) is None:
                raise NotFoundError()

            prosthesis = Prosthesis(
                id=self.id_generator.generate(),
                laboratory_id=laboratory_id,
                type=prosthesis_type,
                material=material,
                shade=shade,
                specifications=specifications,
                notes=notes,
            )
            created = self.prosthesis_repo.create(prosthesis)

        logger.info(
            "Prosthesis created",
            extra={
                "context": {"prosthesis_id": created.id, "laboratory_id": laboratory_id}
            },
        )
        return created

    def get_prosthesis(self, prosthesis_id: str, laboratory_id: str) -> Prosthesis:
        with translate_storage_errors("get_prosthesis"):
            return ensure_owned(
                self.prosthesis_repo.get_by_id(prosthesis_id),
                laboratory_id,
                resource="prosthesis",
            )

    def update_prosthesis(
        self,
        prosthesis_id: str,
        laboratory_id: str,
        prosthesis_type: Union[ProsthesisType, str],
        material: str,
        shade: str = "",
        specifications: str = "",
        notes: str = "",
    ) -> Prosthesis:
        def _change(prosthesis: Prosthesis) -> None:
            ensure_owned(prosthesis, laboratory_id, resource="prosthesis")
            prosthesis.update(
                type=prosthesis_type,
                material=material,
                shade=shade,
                specifications=specifications,
                notes=notes,
            )

        with translate_storage_errors("update_prosthesis"):
            return self.prosthesis_repo.update(prosthesis_id, _change)

    def list_prostheses(
        self,
        laboratory_id: str,
        prosthesis_type: Optional[Union[ProsthesisType, str]] = None,
        material: Optional[str] = None,
    ) -> List[Prosthesis]:
        """List the catalog, filtered by type when given, else by material."""
        if prosthesis_type:
            wanted = parse_prosthesis_type(prosthesis_type)
            with translate_storage_errors("list_prostheses"):
                return self.prosthesis_repo.find_by_type(laboratory_id, wanted)
        with translate_storage_errors("list_prostheses"):
            if material:
                return self.prosthesis_repo.find_by_material(laboratory_id, material)
            return self.prosthesis_repo.list_by_laboratory(laboratory_id)

    def delete_prosthesis(self, prosthesis_id: str, laboratory_id: str) -> None:
        with translate_storage_errors("delete_prosthesis"):
            ensure_owned(
                self.prosthesis_repo.get_by_id(prosthesis_id),
                laboratory_id,
                resource="prosthesis",
            )
            if not self.prosthesis_repo.delete(prosthesis_id):
                raise NotFoundError()
