from __future__ import annotations

from typing import List, Optional

from django.db import transaction

from apps.api.exceptions import BAD_REQUEST, FORBIDDEN, NOT_FOUND, ApplicationError
from apps.auth.identity import Identity, require_admin, require_authenticated
from apps.carts.utils import compute_total
from apps.common import get_logger
from .dtos import OrderDTO
from .models import OrderStatus
from .protocols import (
    CheckoutCartLineRepositoryProtocol,
    CheckoutCartRepositoryProtocol,
    OrderLineRepositoryProtocol,
    OrderMapperProtocol,
    OrderRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")


def _validate_status(status: str) -> str:
    if status not in OrderStatus.values:
        raise ApplicationError(
            BAD_REQUEST,
            "Invalid status. Use 'pending' or 'completed'",
            details={"status": status, "allowed": list(OrderStatus.values)},
        )
    return status


class OrderService:
    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        order_lines: OrderLineRepositoryProtocol,
        carts: CheckoutCartRepositoryProtocol,
        cart_lines: CheckoutCartLineRepositoryProtocol,
        order_mapper: OrderMapperProtocol,
    ):
        self.orders = orders
        self.order_lines = order_lines
        self.carts = carts
        self.cart_lines = cart_lines
        self.order_mapper = order_mapper
        self.logger = logger.bind(service="OrderService")

    def _require_order(self, order_id: int):
        order = self.orders.get(id=order_id)
        if not order:
            self.logger.info("Order not found", order_id=order_id)
            raise ApplicationError(
                NOT_FOUND, "Order not found", details={"id": str(order_id)}
            )
        return order

    def create_order(self, actor: Optional[Identity]) -> OrderDTO:
        """
        Check out the caller's cart: copy its lines into a new pending order,
        then empty the cart. Both writes commit together or not at all.
        """
        actor = require_authenticated(actor)
        with transaction.atomic():
            cart = self.carts.get_for_update(actor.id)
            lines = list(self.cart_lines.list_for_cart(cart.id)) if cart else []
            if not lines:
                self.logger.info("Checkout rejected: empty cart", user_id=actor.id)
                raise ApplicationError(BAD_REQUEST, "Cart is empty")
            order = self.orders.create(
                user_id=actor.id,
                username=actor.username,
                total=compute_total(lines),
                status=OrderStatus.PENDING,
            )
            order_lines = self.order_lines.copy_lines(order, lines)
            self.cart_lines.delete_for_cart(cart.id)
            self.carts.touch(cart)
        self.logger.info(
            "Order created",
            order_id=order.id,
            user_id=actor.id,
            lines=len(order_lines),
            total=order.total,
        )
        return self.order_mapper.to_dto(order, order_lines)

    def list_orders(
        self,
        actor: Optional[Identity],
        status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> List[OrderDTO]:
        actor = require_authenticated(actor)
        if not actor.is_admin:
            # Regular users only ever see their own orders, whatever they asked for.
            filters = {"user_id": actor.id}
        else:
            filters = {}
            if status:
                filters["status"] = _validate_status(status)
            if user_id is not None:
                filters["user_id"] = user_id
        self.logger.debug("Listing orders", actor_id=actor.id, **filters)
        return self.order_mapper.many_to_dto(self.orders.list(**filters))

    def get_order(self, actor: Optional[Identity], order_id: int) -> OrderDTO:
        actor = require_authenticated(actor)
        order = self._require_order(order_id)
        if not actor.is_admin and order.user_id != actor.id:
            self.logger.warning(
                "Order access forbidden",
                order_id=order_id,
                actor_id=actor.id,
                owner_id=order.user_id,
            )
            raise ApplicationError(
                FORBIDDEN,
                "You do not have permission to view this order",
                details={"id": str(order_id)},
            )
        return self.order_mapper.to_dto(order)

    def update_status(
        self, actor: Optional[Identity], order_id: int, status: str
    ) -> OrderDTO:
        actor = require_admin(actor)
        _validate_status(status)
        order = self._require_order(order_id)
        previous = order.status
        order = self.orders.update(order, status=status)
        self.logger.info(
            "Order status updated",
            order_id=order_id,
            previous=previous,
            status=status,
            actor_id=actor.id,
        )
        return self.order_mapper.to_dto(order)
