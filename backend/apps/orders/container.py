from __future__ import annotations

from apps.carts.repositories import CartLineRepository, CartRepository
from .mappers import OrderMapper
from .repositories import OrderLineRepository, OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        order_lines=OrderLineRepository(),
        carts=CartRepository(),
        cart_lines=CartLineRepository(),
        order_mapper=OrderMapper(),
    )
