"""
Order status workflow - the state machine every order moves through.

    received -> in_production -> quality_check -> ready -> delivered
                     ^                 |            |
                     |                 v            |
                     +----------- revision <--------+

``delivered`` is terminal. Wire strings are converted to ``OrderStatus`` at
the edges with ``OrderStatus.parse``; internal code only handles the enum.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from dentallab.core.exceptions import UnknownStatusError


class OrderStatus(str, Enum):
    """Workflow state of an order."""

    RECEIVED = "received"
    IN_PRODUCTION = "in_production"
    QUALITY_CHECK = "quality_check"
    READY = "ready"
    DELIVERED = "delivered"
    REVISION = "revision"

    @classmethod
    def parse(cls, value: Union[str, "OrderStatus", None]) -> "OrderStatus":
        """Convert a wire value to an OrderStatus.

        Raises:
            UnknownStatusError: if the value is not one of the known statuses.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        raise UnknownStatusError(value)

    def __str__(self) -> str:
        return self.value


INITIAL_STATUS = OrderStatus.RECEIVED

TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.RECEIVED: frozenset({OrderStatus.IN_PRODUCTION}),
    OrderStatus.IN_PRODUCTION: frozenset({OrderStatus.QUALITY_CHECK}),
    OrderStatus.QUALITY_CHECK: frozenset({OrderStatus.READY, OrderStatus.REVISION}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED, OrderStatus.REVISION}),
    OrderStatus.REVISION: frozenset({OrderStatus.IN_PRODUCTION}),
    OrderStatus.DELIVERED: frozenset(),
}


def allowed_transitions(current: OrderStatus) -> FrozenSet[OrderStatus]:
    """Return the statuses reachable from ``current`` in one step."""
    return TRANSITIONS.get(current, frozenset())


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """True iff ``target`` is in the allowed-target set of ``current``."""
    return target in allowed_transitions(current)


def is_terminal(status: OrderStatus) -> bool:
    return not allowed_transitions(status)
