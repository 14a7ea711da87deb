"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every failure raised by the domain or the use-case services is one of the
types below. Controllers map them to HTTP responses in a single place
(see ``dentallab.main.register_error_handlers``).
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


class DomainError(Exception):
    """Base class for all domain errors - independent of HTTP or other adapters."""

    default_message = "domain error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """
    The requested resource was not found.

    Raised for entities that are absent, soft-deleted, or owned by another
    laboratory. The three causes always carry the same message.
    """

    default_message = "resource not found"


class DuplicateEmailError(DomainError):
    """The email already exists within the applicable scope."""

    default_message = "email already exists"


class InvalidStatusTransitionError(DomainError):
    """An order status change that the workflow does not permit."""

    default_message = "invalid status transition"

    def __init__(self, current=None, target=None):
        self.current = current
        self.target = target
        super().__init__()


class UnknownStatusError(DomainError):
    """A status string outside the closed set of order statuses."""

    default_message = "invalid status value"

    def __init__(self, value=None):
        self.value = value
        super().__init__()


class UnauthorizedError(DomainError):
    """The caller is not authenticated."""

    default_message = "unauthorized"


class ForbiddenError(DomainError):
    """The caller is authenticated but lacks permission."""

    default_message = "forbidden"


class InternalError(DomainError):
    """Unexpected storage or infrastructure failure."""

    default_message = "internal error"


@dataclass(frozen=True)
class FieldError:
    """A single field validation failure."""

    field: str
    message: str


class ValidationError(DomainError):
    """Aggregate of field-level validation failures.

    All violations found by a validation pass are kept, not just the first.
    """

    default_message = "validation failed"

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        if self.errors:
            first = self.errors[0]
            super().__init__(f"{first.field}: {first.message}")
        else:
            super().__init__()

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    def as_dict(self) -> Dict[str, str]:
        """Return a field -> message mapping (first message wins per field)."""
        details: Dict[str, str] = {}
        for error in self.errors:
            details.setdefault(error.field, error.message)
        return details
