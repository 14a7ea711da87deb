"""
Technician service for business logic following SOLID principles.

Technician email addresses are unique within a laboratory only.
"""

import logging
from typing import List, Optional, Union

from dentallab.core.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from dentallab.core.validation import normalize_email
from dentallab.domain.entities import Technician, TechnicianRole
from dentallab.domain.interfaces import (
    IIdGenerator,
    ILaboratoryRepository,
    ITechnicianRepository,
)
from dentallab.services.storage_errors import translate_storage_errors
from dentallab.services.tenancy import ensure_owned

logger = logging.getLogger(__name__)

ROLE_MESSAGE = "invalid role. Must be one of: senior_technician, technician, apprentice"


def parse_role(value: Union[TechnicianRole, str]) -> TechnicianRole:
    if isinstance(value, TechnicianRole):
        return value
    try:
        return TechnicianRole(str(value).strip())
    except ValueError:
        raise ValidationError.single("role", ROLE_MESSAGE) from None


class TechnicianService:
    """Application service for laboratory technicians."""

    def __init__(
        self,
        technician_repo: ITechnicianRepository,
        laboratory_repo: ILaboratoryRepository,
        id_generator: IIdGenerator,
    ) -> None:
        self.technician_repo = technician_repo
        self.laboratory_repo = laboratory_repo
        self.id_generator = id_generator

    def create_technician(
        self,
        laboratory_id: str,
        name: str,
        email: str,
        phone: str,
        role: Union[TechnicianRole, str],
        specializations: Optional[List[str]] = None,
    ) -> Technician:
        email = normalize_email(email)
        with translate_storage_errors("create_technician"):
            if self.laboratory_repo.get_by_id(laboratory_id) is None:
                raise NotFoundError()
            if self.technician_repo.get_by_email(laboratory_id, email) is not None:
                raise DuplicateEmailError()

            technician = Technician(
                id=self.id_generator.generate(),
                laboratory_id=laboratory_id,
                name=name,
                email=email,
                phone=phone,
                role=role,
                specializations=list(specializations or []),
            )
            created = self.technician_repo.create(technician)

        logger.info(
            "Technician created",
            extra={
                "context": {"technician_id": created.id, "laboratory_id": laboratory_id}
            },
        )
        return created

    def get_technician(self, technician_id: str, laboratory_id: str) -> Technician:
        with translate_storage_errors("get_technician"):
            return ensure_owned(
                self.technician_repo.get_by_id(technician_id),
                laboratory_id,
                resource="technician",
            )

    def update_technician(
        self,
        technician_id: str,
        laboratory_id: str,
        name: str,
        email: str,
        phone: str,
        role: Union[TechnicianRole, str],
        specializations: Optional[List[str]] = None,
    ) -> Technician:
        email = normalize_email(email)

        def _change(technician: Technician) -> None:
            ensure_owned(technician, laboratory_id, resource="technician")
            technician.update(
                name=name,
                email=email,
                phone=phone,
                role=role,
                specializations=specializations,
            )

        with translate_storage_errors("update_technician"):
            current = ensure_owned(
                self.technician_repo.get_by_id(technician_id),
                laboratory_id,
                resource="technician",
            )
            if current.email != email:
                existing = self.technician_repo.get_by_email(laboratory_id, email)
                if existing is not None and existing.id != technician_id:
                    raise DuplicateEmailError()

            return self.technician_repo.update(technician_id, _change)

    def list_technicians(
        self,
        laboratory_id: str,
        role: Optional[Union[TechnicianRole, str]] = None,
    ) -> List[Technician]:
        if role:
            wanted = parse_role(role)
            with translate_storage_errors("list_technicians"):
                return self.technician_repo.list_by_role(laboratory_id, wanted)
        with translate_storage_errors("list_technicians"):
            return self.technician_repo.list_by_laboratory(laboratory_id)

    def delete_technician(self, technician_id: str, laboratory_id: str) -> None:
        with translate_storage_errors("delete_technician"):
            ensure_owned(
                self.technician_repo.get_by_id(technician_id),
                laboratory_id,
                resource="technician",
            )
            if not self.technician_repo.delete(technician_id):
                raise NotFoundError()
