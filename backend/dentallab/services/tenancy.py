"""
Tenant isolation - the single ownership check used by every service.

Every laboratory-owned entity fetched by ID goes through ``ensure_owned``
before it is returned, changed or deleted. An entity that is missing,
soft-deleted, or owned by another laboratory produces the same
``NotFoundError`` so a caller can never learn that another tenant's
resource exists.
"""

import logging
from operator import attrgetter
from typing import Callable, Optional, TypeVar

from dentallab.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")

owner_of_laboratory_entity: Callable[[object], str] = attrgetter("laboratory_id")


def ensure_owned(
    entity: Optional[T],
    laboratory_id: str,
    owner: Callable[[T], str] = owner_of_laboratory_entity,
    resource: str = "resource",
) -> T:
    """Return ``entity`` if it exists and belongs to ``laboratory_id``.

    Args:
        entity: Result of a repository lookup by ID (``None`` when absent).
        laboratory_id: The laboratory the caller acts as.
        owner: Extracts the owning laboratory ID from the entity.
        resource: Entity name, used for logging only.

    Raises:
        NotFoundError: identical for absent and foreign entities.
    """
    if entity is None:
        raise NotFoundError()
    if not laboratory_id or owner(entity) != laboratory_id:
        logger.warning(
            "Cross-tenant access denied",
            extra={
                "context": {
                    "resource": resource,
                    "caller_laboratory_id": laboratory_id,
                }
            },
        )
        raise NotFoundError()
    return entity
