"""
Common validation utilities shared by every domain entity.

This module provides consistent validation patterns across all entities,
collecting every violation instead of stopping at the first one.
"""

import logging
import re
from enum import Enum
from typing import Any, List, Optional, Type

from dentallab.core.exceptions import FieldError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_REGEX = re.compile(r"^\+?[1-9]\d{1,14}$")

MAX_NAME_LENGTH = 200


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[FieldError] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        """Add validation error."""
        self.errors.append(FieldError(field, message))
        logger.debug("Validation error: %s: %s", field, message)

    def raise_if_invalid(self) -> None:
        """Raise a ValidationError carrying every collected violation."""
        if not self.is_valid:
            raise ValidationError(self.errors)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_email(value: Any) -> str:
    """Trim an email so the stored value is the one that was validated."""
    return _clean(value)


def validate_required(value: Any, field: str, result: ValidationResult) -> bool:
    """Validate that a required string field is present and not blank."""
    if _clean(value) == "":
        result.add_error(field, f"{field} is required")
        return False
    return True


def validate_name(
    value: Any,
    field: str,
    result: ValidationResult,
    max_length: int = MAX_NAME_LENGTH,
) -> bool:
    """Validate a required name field capped at ``max_length`` characters."""
    if not validate_required(value, field, result):
        return False
    if len(_clean(value)) > max_length:
        result.add_error(field, f"{field} must be at most {max_length} characters")
        return False
    return True


def validate_email(value: Any, field: str, result: ValidationResult) -> bool:
    """Validate a required email address."""
    if not validate_required(value, field, result):
        return False
    if not EMAIL_REGEX.match(_clean(value)):
        result.add_error(field, "invalid email format")
        return False
    return True


def validate_phone(value: Any, field: str, result: ValidationResult) -> bool:
    """Validate a required phone number (E.164-like, internal spaces ignored)."""
    if not validate_required(value, field, result):
        return False
    if not PHONE_REGEX.match(_clean(value).replace(" ", "")):
        result.add_error(field, "invalid phone format")
        return False
    return True


def validate_choice(
    value: Any,
    field: str,
    enum_cls: Type[Enum],
    result: ValidationResult,
    message: Optional[str] = None,
) -> bool:
    """Validate membership of ``value`` in a closed enumeration."""
    if isinstance(value, enum_cls):
        return True
    if not validate_required(value, field, result):
        return False
    allowed = [member.value for member in enum_cls]
    if _clean(value) not in allowed:
        result.add_error(field, message or f"invalid {field}")
        return False
    return True


def validate_positive_int(
    value: Any, field: str, result: ValidationResult, label: str = "value"
) -> bool:
    """Validate an integer strictly greater than zero."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        result.add_error(field, f"{label} must be greater than 0")
        return False
    return True
