"""
Data Transfer Objects (DTOs) for the HTTP API.

Request DTOs turn a decoded JSON body into the values the services expect;
business validation stays in the domain entities. Response DTOs map domain
entities to JSON-ready dictionaries.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dentallab.core.exceptions import FieldError, ValidationError
from dentallab.domain.entities import Address, ProsthesisItem


def _text(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def parse_address(payload: Dict[str, Any]) -> Address:
    raw = payload.get("address")
    if not isinstance(raw, dict):
        raw = {}
    return Address(
        street=_text(raw, "street"),
        city=_text(raw, "city"),
        state=_text(raw, "state"),
        postal_code=_text(raw, "postal_code"),
        country=_text(raw, "country"),
    )


def parse_prosthesis_items(payload: Dict[str, Any]) -> List[ProsthesisItem]:
    """Parse the ``prosthesis`` array of an order body.

    An absent or empty array is returned as ``[]`` so the Order entity reports
    it together with its other violations.
    """
    raw = payload.get("prosthesis")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError.single("prosthesis", "prosthesis must be a list")

    items: List[ProsthesisItem] = []
    errors: List[FieldError] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            errors.append(FieldError(f"prosthesis[{index}]", "invalid prosthesis item"))
            continue
        items.append(
            ProsthesisItem(
                type=_text(entry, "type"),
                material=_text(entry, "material"),
                shade=_text(entry, "shade"),
                quantity=entry.get("quantity", 0),
                notes=_text(entry, "notes"),
            )
        )
    if errors:
        raise ValidationError(errors)
    return items


def _string_list(payload: Dict[str, Any], key: str) -> List[str]:
    raw = payload.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError.single(key, f"{key} must be a list")
    return [str(value).strip() for value in raw if str(value).strip()]


# ===========================
# Requests
# ===========================


@dataclass
class ContactRequest:
    """Body shared by laboratory and client create/update requests."""

    name: str
    email: str
    phone: str
    address: Address

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ContactRequest":
        return cls(
            name=_text(payload, "name"),
            email=_text(payload, "email"),
            phone=_text(payload, "phone"),
            address=parse_address(payload),
        )


@dataclass
class OrderCreateRequest:
    client_id: str
    prosthesis: List[ProsthesisItem]

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "OrderCreateRequest":
        return cls(
            client_id=_text(payload, "client_id"),
            prosthesis=parse_prosthesis_items(payload),
        )


@dataclass
class OrderUpdateRequest:
    prosthesis: List[ProsthesisItem]

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "OrderUpdateRequest":
        return cls(prosthesis=parse_prosthesis_items(payload))


@dataclass
class OrderStatusRequest:
    status: str

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "OrderStatusRequest":
        status = _text(payload, "status")
        if not status:
            raise ValidationError.single("status", "status is required")
        return cls(status=status)


@dataclass
class ProsthesisRequest:
    """Body for prosthesis catalog create/update requests."""

    type: str
    material: str
    shade: str = ""
    specifications: str = ""
    notes: str = ""

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ProsthesisRequest":
        return cls(
            type=_text(payload, "type"),
            material=_text(payload, "material"),
            shade=_text(payload, "shade"),
            specifications=_text(payload, "specifications"),
            notes=_text(payload, "notes"),
        )


@dataclass
class TechnicianRequest:
    """Body for technician create/update requests."""

    name: str
    email: str
    phone: str
    role: str
    specializations: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "TechnicianRequest":
        return cls(
            name=_text(payload, "name"),
            email=_text(payload, "email"),
            phone=_text(payload, "phone"),
            role=_text(payload, "role"),
            specializations=_string_list(payload, "specializations"),
        )


# ===========================
# Responses
# ===========================


@dataclass
class AddressResponse:
    street: str
    city: str
    state: str
    postal_code: str
    country: str

    @classmethod
    def from_domain(cls, address: Address) -> "AddressResponse":
        return cls(
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        )


@dataclass
class LaboratoryResponse:
    """DTO for laboratory API responses."""

    id: str
    name: str
    email: str
    phone: str
    address: AddressResponse
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, laboratory) -> "LaboratoryResponse":
        return cls(
            id=laboratory.id,
            name=laboratory.name,
            email=laboratory.email,
            phone=laboratory.phone,
            address=AddressResponse.from_domain(laboratory.address),
            created_at=_isoformat(laboratory.created_at),
            updated_at=_isoformat(laboratory.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ClientResponse:
    """DTO for client API responses."""

    id: str
    laboratory_id: str
    name: str
    email: str
    phone: str
    address: AddressResponse
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, client) -> "ClientResponse":
        return cls(
            id=client.id,
            laboratory_id=client.laboratory_id,
            name=client.name,
            email=client.email,
            phone=client.phone,
            address=AddressResponse.from_domain(client.address),
            created_at=_isoformat(client.created_at),
            updated_at=_isoformat(client.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProsthesisItemResponse:
    type: str
    material: str
    shade: str
    quantity: int
    notes: str

    @classmethod
    def from_domain(cls, item: ProsthesisItem) -> "ProsthesisItemResponse":
        return cls(
            type=item.type,
            material=item.material,
            shade=item.shade,
            quantity=item.quantity,
            notes=item.notes,
        )


@dataclass
class OrderResponse:
    """DTO for order API responses."""

    id: str
    client_id: str
    laboratory_id: str
    status: str
    prosthesis: List[ProsthesisItemResponse]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, order) -> "OrderResponse":
        return cls(
            id=order.id,
            client_id=order.client_id,
            laboratory_id=order.laboratory_id,
            status=order.status.value,
            prosthesis=[ProsthesisItemResponse.from_domain(i) for i in order.prosthesis],
            created_at=_isoformat(order.created_at),
            updated_at=_isoformat(order.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProsthesisResponse:
    """DTO for prosthesis catalog API responses."""

    id: str
    laboratory_id: str
    type: str
    material: str
    shade: str
    specifications: str
    notes: str
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, prosthesis) -> "ProsthesisResponse":
        return cls(
            id=prosthesis.id,
            laboratory_id=prosthesis.laboratory_id,
            type=prosthesis.type.value,
            material=prosthesis.material,
            shade=prosthesis.shade,
            specifications=prosthesis.specifications,
            notes=prosthesis.notes,
            created_at=_isoformat(prosthesis.created_at),
            updated_at=_isoformat(prosthesis.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TechnicianResponse:
    """DTO for technician API responses."""

    id: str
    laboratory_id: str
    name: str
    email: str
    phone: str
    role: str
    specializations: List[str]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, technician) -> "TechnicianResponse":
        return cls(
            id=technician.id,
            laboratory_id=technician.laboratory_id,
            name=technician.name,
            email=technician.email,
            phone=technician.phone,
            role=technician.role.value,
            specializations=list(technician.specializations),
            created_at=_isoformat(technician.created_at),
            updated_at=_isoformat(technician.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
