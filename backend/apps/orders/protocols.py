from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import Order, OrderLine

if TYPE_CHECKING:
    from apps.carts.models import Cart, CartLine
    from apps.orders.dtos import OrderDTO


class OrderRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Order]:
        ...

    def get(self, **filters) -> Optional[Order]:
        ...

    def create(self, **data) -> Order:
        ...

    def update(self, obj: Order, **data) -> Order:
        ...


class OrderLineRepositoryProtocol(Protocol):
    def copy_lines(self, order: Order, lines: Iterable["CartLine"]) -> list:
        ...


class CheckoutCartRepositoryProtocol(Protocol):
    def get_for_update(self, user_id: int) -> Optional["Cart"]:
        ...

    def touch(self, cart: "Cart") -> None:
        ...


class CheckoutCartLineRepositoryProtocol(Protocol):
    def list_for_cart(self, cart_id: int) -> Iterable["CartLine"]:
        ...

    def delete_for_cart(self, cart_id: int) -> None:
        ...


class OrderMapperProtocol(Protocol):
    def to_dto(self, order: Order, lines: Optional[Iterable[OrderLine]] = None) -> "OrderDTO":
        ...

    def many_to_dto(self, orders: Iterable[Order]) -> list:
        ...
