from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Cart, CartLine

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Cart]:
        ...

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        ...

    def get_for_update(self, user_id: int) -> Optional[Cart]:
        ...

    def lock_for_user(self, user_id: int) -> Cart:
        ...

    def touch(self, cart: Cart) -> None:
        ...

    def delete_for_user(self, user_id: int) -> None:
        ...


class CartLineRepositoryProtocol(Protocol):
    def create(self, **data) -> CartLine:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartLine]:
        ...

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional[CartLine]:
        ...

    def increment(self, line: CartLine, amount: int) -> CartLine:
        ...

    def update(self, obj: CartLine, **data) -> CartLine:
        ...

    def delete(self, obj: CartLine) -> None:
        ...

    def delete_product(self, cart_id: int, product_id: int) -> None:
        ...

    def delete_for_cart(self, cart_id: int) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart, lines: Iterable[CartLine]) -> "CartDTO":
        ...
