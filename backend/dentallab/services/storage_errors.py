"""
Translation of unexpected storage failures into domain errors.

Domain errors raised by repositories or entities pass through untouched;
anything else is logged and surfaced as ``InternalError`` so storage
exception types never leak to callers.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from dentallab.core.exceptions import DomainError, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DomainError:
        raise
    except Exception as exc:
        logger.error(
            "Unexpected storage failure",
            extra={"context": {"operation": operation, "error": str(exc)}},
            exc_info=True,
        )
        raise InternalError() from exc
