"""
Client service for business logic following SOLID principles.

This service:
- Keeps business rules separate from controllers and repositories (Single Responsibility)
- Depends on abstractions (IClientRepository, ILaboratoryRepository) not concrete implementations
- Scopes every lookup to the caller's laboratory

Client email addresses are unique within a laboratory only.
"""

import logging
from typing import List

from dentallab.core.exceptions import DuplicateEmailError, NotFoundError
from dentallab.core.validation import normalize_email
from dentallab.domain.entities import Address, Client
from dentallab.domain.interfaces import (
    IClientRepository,
    IIdGenerator,
    ILaboratoryRepository,
)
from dentallab.services.storage_errors import translate_storage_errors
from dentallab.services.tenancy import ensure_owned

logger = logging.getLogger(__name__)


class ClientService:
    """Application service for client-related use-cases following SOLID principles."""

    def __init__(
        self,
        client_repo: IClientRepository,
        laboratory_repo: ILaboratoryRepository,
        id_generator: IIdGenerator,
    ) -> None:
        self.client_repo = client_repo
        self.laboratory_repo = laboratory_repo
        self.id_generator = id_generator

    def create_client(
        self,
        laboratory_id: str,
        name: str,
        email: str,
        phone: str,
        address: Address,
    ) -> Client:
        """Create a client owned by ``laboratory_id``.

        Business Rules:
        - The laboratory must exist
        - Email must be unused among the laboratory's active clients
        """
        email = normalize_email(email)
        with translate_storage_errors("create_client"):
            if self.laboratory_repo.get_by_id(laboratory_id) is None:
                raise NotFoundError()
            if self.client_repo.get_by_email(laboratory_id, email) is not None:
                raise DuplicateEmailError()

            client = Client(
                id=self.id_generator.generate(),
                laboratory_id=laboratory_id,
                name=name,
                email=email,
                phone=phone,
                address=address,
            )
            created = self.client_repo.create(client)

        logger.info(
            "Client created",
            extra={"context": {"client_id": created.id, "laboratory_id": laboratory_id}},
        )
        return created

    def get_client(self, client_id: str, laboratory_id: str) -> Client:
        with translate_storage_errors("get_client"):
            return ensure_owned(
                self.client_repo.get_by_id(client_id), laboratory_id, resource="client"
            )

    def update_client(
        self,
        client_id: str,
        laboratory_id: str,
        name: str,
        email: str,
        phone: str,
        address: Address,
    ) -> Client:
        email = normalize_email(email)

        def _change(client: Client) -> None:
            ensure_owned(client, laboratory_id, resource="client")
            client.update(name=name, email=email, phone=phone, address=address)

        with translate_storage_errors("update_client"):
            current = ensure_owned(
                self.client_repo.get_by_id(client_id), laboratory_id, resource="client"
            )
            if current.email != email:
                existing = self.client_repo.get_by_email(laboratory_id, email)
                if existing is not None and existing.id != client_id:
                    raise DuplicateEmailError()

            return self.client_repo.update(client_id, _change)

    def list_clients(self, laboratory_id: str) -> List[Client]:
        with translate_storage_errors("list_clients"):
            return self.client_repo.list_by_laboratory(laboratory_id)

    def delete_client(self, client_id: str, laboratory_id: str) -> None:
        with translate_storage_errors("delete_client"):
            ensure_owned(
                self.client_repo.get_by_id(client_id), laboratory_id, resource="client"
            )
            if not self.client_repo.delete(client_id):
                raise NotFoundError()

        logger.info(
            "Client deleted",
            extra={"context": {"client_id": client_id, "laboratory_id": laboratory_id}},
        )
