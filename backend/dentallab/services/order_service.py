"""
Order service for business logic following SOLID principles.

This service:
- Derives an order's laboratory from its client, never from caller input
- Routes every status change through the workflow state machine
- Scopes every lookup to the caller's laboratory

Line-item updates are independent of the order status.
"""

import logging
from typing import List, Union

from dentallab.core.exceptions import NotFoundError
from dentallab.domain.entities import Order, ProsthesisItem
from dentallab.domain.interfaces import IClientRepository, IIdGenerator, IOrderRepository
from dentallab.domain.workflow import OrderStatus
from dentallab.services.storage_errors import translate_storage_errors
from dentallab.services.tenancy import ensure_owned

logger = logging.getLogger(__name__)


class OrderService:
    """Application service for work orders and their status workflow."""

    def __init__(
        self,
        order_repo: IOrderRepository,
        client_repo: IClientRepository,
        id_generator: IIdGenerator,
    ) -> None:
        self.order_repo = order_repo
        self.client_repo = client_repo
        self.id_generator = id_generator

    def create_order(
        self, client_id: str, laboratory_id: str, prosthesis: List[ProsthesisItem]
    ) -> Order:
        """Create an order for a client of the caller's laboratory.

        Business Rules:
        - The client must exist and belong to ``laboratory_id`` (NotFound otherwise)
        - The order's laboratory is copied from the client
        - New orders start in ``received``
        """
        with translate_storage_errors("create_order"):
            client = ensure_owned(
                self.client_repo.get_by_id(client_id), laboratory_id, resource="client"
            )

            order = Order(
                id=self.id_generator.generate(),
                client_id=client.id,
                laboratory_id=client.laboratory_id,
                prosthesis=list(prosthesis or []),
            )
            created = self.order_repo.create(order)

        logger.info(
            "Order created",
            extra={
                "context": {
                    "order_id": created.id,
                    "client_id": created.client_id,
                    "laboratory_id": created.laboratory_id,
                    "items": len(created.prosthesis),
                }
            },
        )
        return created

    def get_order(self, order_id: str, laboratory_id: str) -> Order:
        with translate_storage_errors("get_order"):
            return ensure_owned(
                self.order_repo.get_by_id(order_id), laboratory_id, resource="order"
            )

    def update_order(
        self, order_id: str, laboratory_id: str, prosthesis: List[ProsthesisItem]
    ) -> Order:
        """Replace the line items of an order (status is left unchanged)."""

        def _change(order: Order) -> None:
            ensure_owned(order, laboratory_id, resource="order")
            order.update(prosthesis)

        with translate_storage_errors("update_order"):
            return self.order_repo.update(order_id, _change)

    def update_order_status(
        self, order_id: str, laboratory_id: str, status: Union[OrderStatus, str]
    ) -> Order:
        """Move an order through the workflow.

        Raises:
            UnknownStatusError: ``status`` is not a known status value.
            NotFoundError: the order is absent or owned by another laboratory.
            InvalidStatusTransitionError: the workflow forbids the move.
        """
        target = OrderStatus.parse(status)
        previous: List[OrderStatus] = []

        def _transition(order: Order) -> None:
            ensure_owned(order, laboratory_id, resource="order")
            previous.append(order.status)
            order.apply_transition(target)

        with translate_storage_errors("update_order_status"):
            updated = self.order_repo.update(order_id, _transition)

        logger.info(
            "Order status changed",
            extra={
                "context": {
                    "order_id": order_id,
                    "from": previous[0].value,
                    "to": target.value,
                }
            },
        )
        return updated

    def list_orders(self, laboratory_id: str) -> List[Order]:
        with translate_storage_errors("list_orders"):
            return self.order_repo.list_by_laboratory(laboratory_id)

    def list_orders_by_client(self, client_id: str, laboratory_id: str) -> List[Order]:
        """List a client's orders; the client must belong to ``laboratory_id``."""
        with translate_storage_errors("list_orders_by_client"):
            ensure_owned(
                self.client_repo.get_by_id(client_id), laboratory_id, resource="client"
            )
            return self.order_repo.list_by_client(client_id)

    def delete_order(self, order_id: str, laboratory_id: str) -> None:
        with translate_storage_errors("delete_order"):
            ensure_owned(
                self.order_repo.get_by_id(order_id), laboratory_id, resource="order"
            )
            if not self.order_repo.delete(order_id):
                raise NotFoundError()

        logger.info(
            "Order deleted",
            extra={"context": {"order_id": order_id, "laboratory_id": laboratory_id}},
        )
