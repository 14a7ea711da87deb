"""
Laboratory service for business logic following SOLID principles.

This service:
- Keeps business rules separate from controllers and repositories (Single Responsibility)
- Depends on abstractions (ILaboratoryRepository, IIdGenerator) not concrete implementations
- Works with domain entities, not storage rows

Laboratory email addresses are unique across all active laboratories.
A laboratory may only modify or delete its own record.
"""

import logging
from operator import attrgetter
from typing import List

from dentallab.core.exceptions import DuplicateEmailError, NotFoundError
from dentallab.core.validation import normalize_email
from dentallab.domain.entities import Address, Laboratory
from dentallab.domain.interfaces import IIdGenerator, ILaboratoryRepository
from dentallab.services.storage_errors import translate_storage_errors
from dentallab.services.tenancy import ensure_owned

logger = logging.getLogger(__name__)

_laboratory_owner = attrgetter("id")


class LaboratoryService:
    """Application service for laboratory (tenant) use-cases."""

    def __init__(
        self, laboratory_repo: ILaboratoryRepository, id_generator: IIdGenerator
    ) -> None:
        self.laboratory_repo = laboratory_repo
        self.id_generator = id_generator

    def create_laboratory(
        self, name: str, email: str, phone: str, address: Address
    ) -> Laboratory:
        """Register a new laboratory (signup).

        Raises:
            DuplicateEmailError: another active laboratory uses the email.
            ValidationError: any field is invalid.
        """
        email = normalize_email(email)
        with translate_storage_errors("create_laboratory"):
            if self.laboratory_repo.get_by_email(email) is not None:
                raise DuplicateEmailError()

            laboratory = Laboratory(
                id=self.id_generator.generate(),
                name=name,
                email=email,
                phone=phone,
                address=address,
            )
            created = self.laboratory_repo.create(laboratory)

        logger.info(
            "Laboratory created", extra={"context": {"laboratory_id": created.id}}
        )
        return created

    def get_laboratory(self, laboratory_id: str) -> Laboratory:
        with translate_storage_errors("get_laboratory"):
            laboratory = self.laboratory_repo.get_by_id(laboratory_id)
        if laboratory is None:
            raise NotFoundError()
        return laboratory

    def list_laboratories(self) -> List[Laboratory]:
        with translate_storage_errors("list_laboratories"):
            return self.laboratory_repo.list_all()

    def update_laboratory(
        self,
        laboratory_id: str,
        caller_laboratory_id: str,
        name: str,
        email: str,
        phone: str,
        address: Address,
    ) -> Laboratory:
        """Update a laboratory profile. Only the laboratory itself may do this."""
        email = normalize_email(email)

        def _change(laboratory: Laboratory) -> None:
            ensure_owned(
                laboratory,
                caller_laboratory_id,
                owner=_laboratory_owner,
                resource="laboratory",
            )
            laboratory.update(name=name, email=email, phone=phone, address=address)

        with translate_storage_errors("update_laboratory"):
            current = ensure_owned(
                self.laboratory_repo.get_by_id(laboratory_id),
                caller_laboratory_id,
                owner=_laboratory_owner,
                resource="laboratory",
            )
            if current.email != email:
                existing = self.laboratory_repo.get_by_email(email)
                if existing is not None and existing.id != laboratory_id:
                    raise DuplicateEmailError()

            return self.laboratory_repo.update(laboratory_id, _change)

    def delete_laboratory(self, laboratory_id: str, caller_laboratory_id: str) -> None:
        with translate_storage_errors("delete_laboratory"):
            ensure_owned(
                self.laboratory_repo.get_by_id(laboratory_id),
                caller_laboratory_id,
                owner=_laboratory_owner,
                resource="laboratory",
            )
            if not self.laboratory_repo.delete(laboratory_id):
                raise NotFoundError()

        logger.info(
            "Laboratory deleted", extra={"context": {"laboratory_id": laboratory_id}}
        )
