"""Unique identifier generation for new entities."""

import uuid

from dentallab.domain.interfaces import IIdGenerator


class UuidGenerator(IIdGenerator):
    """Generates random UUID4 strings."""

    def generate(self) -> str:
        return str(uuid.uuid4())
