"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.

Contract shared by every repository:
- IDs are globally unique; lookups by ID are not scoped by laboratory.
- Soft-deleted rows are invisible to every read and uniqueness lookup.
- Entities passed in and handed out are independent copies of the stored rows.
- ``update`` reads, changes and stores a row as one step: concurrent updates
  of the same row never overwrite each other.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .entities import (
    Client,
    Laboratory,
    Order,
    Prosthesis,
    ProsthesisType,
    Technician,
    TechnicianRole,
)


class ILaboratoryReader(ABC):
    """Interface for laboratory read operations - Interface Segregation Principle."""

    @abstractmethod
    def get_by_id(self, laboratory_id: str) -> Optional[Laboratory]:
        """Get an active laboratory by ID."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Laboratory]:
        """Get an active laboratory by email (global scope)."""
        pass

    @abstractmethod
    def list_all(self) -> List[Laboratory]:
        """Get all active laboratories."""
        pass


class ILaboratoryWriter(ABC):
    """Interface for laboratory write operations - Interface Segregation Principle."""

    @abstractmethod
    def create(self, laboratory: Laboratory) -> Laboratory:
        """Store a new laboratory."""
        pass

    @abstractmethod
    def update(
        self, laboratory_id: str, change: Callable[[Laboratory], None]
    ) -> Laboratory:
        """Apply ``change`` to an active laboratory atomically and store it."""
        pass

    @abstractmethod
    def delete(self, laboratory_id: str) -> bool:
        """Soft delete a laboratory. Returns False if no active row matched."""
        pass


class ILaboratoryRepository(ILaboratoryReader, ILaboratoryWriter):
    """Complete laboratory repository interface combining read/write operations."""

    pass


class IClientReader(ABC):
    """Interface for client read operations - Interface Segregation Principle."""

    @abstractmethod
    def get_by_id(self, client_id: str) -> Optional[Client]:
        """Get an active client by ID."""
        pass

    @abstractmethod
    def get_by_email(self, laboratory_id: str, email: str) -> Optional[Client]:
        """Get an active client by email within one laboratory."""
        pass

    @abstractmethod
    def list_by_laboratory(self, laboratory_id: str) -> List[Client]:
        """Get all active clients of a laboratory."""
        pass


class IClientWriter(ABC):
    """Interface for client write operations - Interface Segregation Principle."""

    @abstractmethod
    def create(self, client: Client) -> Client:
        """Store a new client."""
        pass

    @abstractmethod
    def update(self, client_id: str, change: Callable[[Client], None]) -> Client:
        """Apply ``change`` to an active client atomically and store it."""
        pass

    @abstractmethod
    def delete(self, client_id: str) -> bool:
        """Soft delete a client."""
        pass


class IClientRepository(IClientReader, IClientWriter):
    """Complete client repository interface combining read/write operations."""

    pass


class IOrderReader(ABC):
    """Interface for order read operations."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get an active order by ID."""
        pass

    @abstractmethod
    def list_by_laboratory(self, laboratory_id: str) -> List[Order]:
        """Get all active orders of a laboratory."""
        pass

    @abstractmethod
    def list_by_client(self, client_id: str) -> List[Order]:
        """Get all active orders placed by a client."""
        pass


class IOrderWriter(ABC):
    """Interface for order write operations."""

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Store a new order."""
        pass

    @abstractmethod
    def update(self, order_id: str, change: Callable[[Order], None]) -> Order:
        """Apply ``change`` to an active order atomically (line items and status)."""
        pass

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Soft delete an order."""
        pass


class IOrderRepository(IOrderReader, IOrderWriter):
    """Complete order repository interface."""

    pass


class IProsthesisReader(ABC):
    """Interface for prosthesis catalog read operations."""

    @abstractmethod
    def get_by_id(self, prosthesis_id: str) -> Optional[Prosthesis]:
        """Get an active prosthesis by ID."""
        pass

    @abstractmethod
    def list_by_laboratory(self, laboratory_id: str) -> List[Prosthesis]:
        """Get all active prostheses of a laboratory."""
        pass

    @abstractmethod
    def find_by_type(
        self, laboratory_id: str, prosthesis_type: ProsthesisType
    ) -> List[Prosthesis]:
        """Get active prostheses of one type within a laboratory."""
        pass

    @abstractmethod
    def find_by_material(self, laboratory_id: str, material: str) -> List[Prosthesis]:
        """Get active prostheses by material (case-insensitive) within a laboratory."""
        pass


class IProsthesisWriter(ABC):
    """Interface for prosthesis catalog write operations."""

    @abstractmethod
    def create(self, prosthesis: Prosthesis) -> Prosthesis:
        pass

    @abstractmethod
    def update(
        self, prosthesis_id: str, change: Callable[[Prosthesis], None]
    ) -> Prosthesis:
        pass

    @abstractmethod
    def delete(self, prosthesis_id: str) -> bool:
        pass


class IProsthesisRepository(IProsthesisReader, IProsthesisWriter):
    """Complete prosthesis repository interface."""

    pass


class ITechnicianReader(ABC):
    """Interface for technician read operations."""

    @abstractmethod
    def get_by_id(self, technician_id: str) -> Optional[Technician]:
        pass

    @abstractmethod
    def get_by_email(self, laboratory_id: str, email: str) -> Optional[Technician]:
        """Get an active technician by email within one laboratory."""
        pass

    @abstractmethod
    def list_by_laboratory(self, laboratory_id: str) -> List[Technician]:
        pass

    @abstractmethod
    def list_by_role(
        self, laboratory_id: str, role: TechnicianRole
    ) -> List[Technician]:
        pass


class ITechnicianWriter(ABC):
    """Interface for technician write operations."""

    @abstractmethod
    def create(self, technician: Technician) -> Technician:
        pass

    @abstractmethod
    def update(
        self, technician_id: str, change: Callable[[Technician], None]
    ) -> Technician:
        pass

    @abstractmethod
    def delete(self, technician_id: str) -> bool:
        pass


class ITechnicianRepository(ITechnicianReader, ITechnicianWriter):
    """Complete technician repository interface."""

    pass


class IIdGenerator(ABC):
    """Interface for unique identifier generation."""

    @abstractmethod
    def generate(self) -> str:
        pass
