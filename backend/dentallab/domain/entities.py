"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification

Every entity validates itself on construction and on ``update``; both paths
share one ``validate`` routine and report every violation at once. Owned
entities carry a ``laboratory_id`` that is fixed at creation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Type

from dentallab.core.exceptions import InvalidStatusTransitionError, ValidationError
from dentallab.core.validation import (
    ValidationResult,
    validate_choice,
    validate_email,
    validate_name,
    validate_phone,
    validate_positive_int,
    validate_required,
)
from dentallab.domain.workflow import INITIAL_STATUS, OrderStatus, can_transition


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_enum(value: Any, enum_cls: Type[Enum]) -> Any:
    """Convert a valid wire string to its enum member, leave anything else as-is."""
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    try:
        return enum_cls(value.strip())
    except ValueError:
        return value


class ProsthesisType(str, Enum):
    """Catalog categories of dental prostheses."""

    CROWN = "crown"
    BRIDGE = "bridge"
    COMPLETE_DENTURE = "complete_denture"
    PARTIAL_DENTURE = "partial_denture"
    IMPLANT = "implant"
    VENEER = "veneer"
    INLAY = "inlay"
    ONLAY = "onlay"


class TechnicianRole(str, Enum):
    """Roles a laboratory technician can hold."""

    SENIOR_TECHNICIAN = "senior_technician"
    TECHNICIAN = "technician"
    APPRENTICE = "apprentice"


class _Lifecycle:
    """Timestamps, soft delete and transactional field updates shared by entities."""

    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime]

    def validate(self) -> None:  # pragma: no cover - interface definition
        raise NotImplementedError("Subclasses must implement validate")

    def _apply_changes(self, **changes: Any) -> None:
        """Overwrite fields, re-validate, and roll back if validation fails."""
        previous = {name: getattr(self, name) for name in changes}
        for name, value in changes.items():
            setattr(self, name, value)
        try:
            self.validate()
        except ValidationError:
            for name, value in previous.items():
                setattr(self, name, value)
            raise
        self.updated_at = utcnow()

    def delete(self) -> None:
        """Soft delete: stamp ``deleted_at`` and keep the record."""
        self.deleted_at = utcnow()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass
class Address:
    """Postal address embedded in laboratories and clients."""

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    def validate(self, result: ValidationResult, prefix: str = "address") -> None:
        validate_required(self.street, f"{prefix}.street", result)
        validate_required(self.city, f"{prefix}.city", result)
        validate_required(self.state, f"{prefix}.state", result)
        validate_required(self.postal_code, f"{prefix}.postal_code", result)
        validate_required(self.country, f"{prefix}.country", result)


@dataclass
class Laboratory(_Lifecycle):
    """Domain entity representing a dental prosthesis laboratory (the tenant)."""

    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        self.validate()

    def validate(self) -> None:
        result = ValidationResult()
        validate_name(self.name, "name", result)
        validate_email(self.email, "email", result)
        validate_phone(self.phone, "phone", result)
        self.address.validate(result)
        result.raise_if_invalid()

    def update(self, name: str, email: str, phone: str, address: Address) -> None:
        self._apply_changes(name=name, email=email, phone=phone, address=address)


@dataclass
class Client(_Lifecycle):
    """Domain entity representing a dental clinic or dentist ordering work."""

    id: str = ""
    laboratory_id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        self.validate()

    def validate(self) -> None:
        result = ValidationResult()
        validate_required(self.laboratory_id, "laboratory_id", result)
        validate_name(self.name, "name", result)
        validate_email(self.email, "email", result)
        validate_phone(self.phone, "phone", result)
        self.address.validate(result)
        result.raise_if_invalid()

    def update(self, name: str, email: str, phone: str, address: Address) -> None:
        self._apply_changes(name=name, email=email, phone=phone, address=address)


@dataclass
class ProsthesisItem:
    """One line item of an order. Validated by the owning Order."""

    type: str = ""
    material: str = ""
    shade: str = ""
    quantity: int = 0
    notes: str = ""

    def validate(self, result: ValidationResult, prefix: str) -> None:
        validate_required(self.type, f"{prefix}.type", result)
        validate_required(self.material, f"{prefix}.material", result)
        validate_positive_int(
            self.quantity, f"{prefix}.quantity", result, label="quantity"
        )


@dataclass
class Order(_Lifecycle):
    """Domain entity for a prosthesis work order placed by a client.

    ``status`` only changes through ``apply_transition``.
    """

    id: str = ""
    client_id: str = ""
    laboratory_id: str = ""
    status: OrderStatus = INITIAL_STATUS
    prosthesis: List[ProsthesisItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        self.status = _coerce_enum(self.status, OrderStatus)
        if self.prosthesis is None:
            self.prosthesis = []
        self.validate()

    def validate(self) -> None:
        result = ValidationResult()
        validate_required(self.client_id, "client_id", result)
        validate_required(self.laboratory_id, "laboratory_id", result)
        validate_choice(self.status, "status", OrderStatus, result)
        if not self.prosthesis:
            result.add_error("prosthesis", "at least one prosthesis item is required")
        for index, item in enumerate(self.prosthesis):
            item.validate(result, prefix=f"prosthesis[{index}]")
        result.raise_if_invalid()

    def update(self, prosthesis: List[ProsthesisItem]) -> None:
        """Replace the line items. Allowed regardless of the current status."""
        self._apply_changes(prosthesis=list(prosthesis))

    def apply_transition(self, target: OrderStatus) -> None:
        """Move the order to ``target`` if the workflow allows it.

        Raises:
            UnknownStatusError: ``target`` is not a known status string.
            InvalidStatusTransitionError: the workflow forbids the move.
        """
        target = OrderStatus.parse(target)
        if not can_transition(self.status, target):
            raise InvalidStatusTransitionError(self.status, target)
        self.status = target
        self.updated_at = utcnow()


@dataclass
class Prosthesis(_Lifecycle):
    """Catalog entry for a prosthesis a laboratory produces."""

    id: str = ""
    laboratory_id: str = ""
    type: ProsthesisType = ProsthesisType.CROWN
    material: str = ""
    shade: str = ""
    specifications: str = ""
    notes: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        self.type = _coerce_enum(self.type, ProsthesisType)
        self.validate()

    def validate(self) -> None:
        result = ValidationResult()
        validate_required(self.laboratory_id, "laboratory_id", result)
        validate_choice(
            self.type, "type", ProsthesisType, result, "invalid prosthesis type"
        )
        validate_required(self.material, "material", result)
        result.raise_if_invalid()

    def update(
        self,
        type: ProsthesisType,
        material: str,
        shade: str = "",
        specifications: str = "",
        notes: str = "",
    ) -> None:
        self._apply_changes(
            type=_coerce_enum(type, ProsthesisType),
            material=material,
            shade=shade,
            specifications=specifications,
            notes=notes,
        )


@dataclass
class Technician(_Lifecycle):
    """Domain entity representing a laboratory technician."""

    id: str = ""
    laboratory_id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    role: TechnicianRole = TechnicianRole.TECHNICIAN
    specializations: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        self.role = _coerce_enum(self.role, TechnicianRole)
        if self.specializations is None:
            self.specializations = []
        self.validate()

    def validate(self) -> None:
        result = ValidationResult()
        validate_required(self.laboratory_id, "laboratory_id", result)
        validate_name(self.name, "name", result)
        validate_email(self.email, "email", result)
        validate_phone(self.phone, "phone", result)
        validate_choice(
            self.role,
            "role",
            TechnicianRole,
            result,
            "invalid role. Must be one of: senior_technician, technician, apprentice",
        )
        result.raise_if_invalid()

    def update(
        self,
        name: str,
        email: str,
        phone: str,
        role: TechnicianRole,
        specializations: Optional[List[str]] = None,
    ) -> None:
        self._apply_changes(
            name=name,
            email=email,
            phone=phone,
            role=_coerce_enum(role, TechnicianRole),
            specializations=list(specializations or []),
        )
