from .client_service import ClientService
from .laboratory_service import LaboratoryService
from .order_service import OrderService
from .prosthesis_service import ProsthesisService
from .technician_service import TechnicianService

__all__ = [
    "ClientService",
    "LaboratoryService",
    "OrderService",
    "ProsthesisService",
    "TechnicianService",
]
