from .client_repository import ClientRepository
from .laboratory_repository import LaboratoryRepository
from .order_repository import OrderRepository
from .prosthesis_repository import ProsthesisRepository
from .technician_repository import TechnicianRepository

__all__ = [
    "ClientRepository",
    "LaboratoryRepository",
    "OrderRepository",
    "ProsthesisRepository",
    "TechnicianRepository",
]
