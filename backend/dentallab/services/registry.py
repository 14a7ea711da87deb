"""
Service registry - wires repositories and services for one application.

``create_app`` stores the registry in ``app.extensions["dentallab"]`` and the
controllers resolve their service through ``get_registry()``.
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app

from dentallab.domain.interfaces import IIdGenerator
from dentallab.repositories import (
    ClientRepository,
    LaboratoryRepository,
    OrderRepository,
    ProsthesisRepository,
    TechnicianRepository,
)
from dentallab.services.client_service import ClientService
from dentallab.services.laboratory_service import LaboratoryService
from dentallab.services.order_service import OrderService
from dentallab.services.prosthesis_service import ProsthesisService
from dentallab.services.technician_service import TechnicianService
from dentallab.utils.id_generator import UuidGenerator

EXTENSION_KEY = "dentallab"


@dataclass
class ServiceRegistry:
    laboratory_service: LaboratoryService
    client_service: ClientService
    order_service: OrderService
    prosthesis_service: ProsthesisService
    technician_service: TechnicianService


def build_in_memory_registry(
    id_generator: Optional[IIdGenerator] = None,
) -> ServiceRegistry:
    """Create fresh in-memory repositories and the services on top of them."""
    ids = id_generator or UuidGenerator()
    laboratory_repo = LaboratoryRepository()
    client_repo = ClientRepository()
    order_repo = OrderRepository()
    prosthesis_repo = ProsthesisRepository()
    technician_repo = TechnicianRepository()

    return ServiceRegistry(
        laboratory_service=LaboratoryService(laboratory_repo, ids),
        client_service=ClientService(client_repo, laboratory_repo, ids),
        order_service=OrderService(order_repo, client_repo, ids),
        prosthesis_service=ProsthesisService(prosthesis_repo, laboratory_repo, ids),
        technician_service=TechnicianService(technician_repo, laboratory_repo, ids),
    )


def get_registry() -> ServiceRegistry:
    return current_app.extensions[EXTENSION_KEY]
