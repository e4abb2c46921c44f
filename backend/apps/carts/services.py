from __future__ import annotations

from typing import Optional

from django.db import transaction

from apps.api.exceptions import BAD_REQUEST, NOT_FOUND, ApplicationError
from apps.auth.identity import Identity, require_authenticated
from apps.common import get_logger
from .dtos import CartDTO
from .protocols import (
    CartLineRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """
    The caller's own cart. Mutations run inside a transaction holding a row
    lock on the cart, so concurrent requests from the same user serialize
    instead of overwriting each other's lines.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_lines: CartLineRepositoryProtocol,
        products: ProductRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_lines = cart_lines
        self.products = products
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def _to_dto(self, cart) -> CartDTO:
        return self.cart_mapper.to_dto(cart, list(self.cart_lines.list_for_cart(cart.id)))

    def _locked_cart(self, user_id: int):
        cart = self.carts.get_for_update(user_id)
        if not cart:
            self.logger.info("Cart not found", user_id=user_id)
            raise ApplicationError(NOT_FOUND, "Cart not found")
        return cart

    def get_or_create_cart(self, actor: Optional[Identity]) -> CartDTO:
        actor = require_authenticated(actor)
        cart, created = self.carts.get_or_create_for_user(actor.id)
        if created:
            self.logger.info("Cart created lazily", user_id=actor.id, cart_id=cart.id)
        return self._to_dto(cart)

    def add_item(
        self, actor: Optional[Identity], product_id: int, quantity: int = 1
    ) -> CartDTO:
        actor = require_authenticated(actor)
        if quantity is None or int(quantity) < 1:
            self.logger.info(
                "Rejected cart add with invalid quantity",
                user_id=actor.id,
                quantity=quantity,
            )
            raise ApplicationError(
                BAD_REQUEST,
                "Quantity must be at least 1",
                details={"quantity": quantity},
            )
        quantity = int(quantity)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info(
                "Cart add failed: product not found",
                user_id=actor.id,
                product_id=product_id,
            )
            raise ApplicationError(
                NOT_FOUND, "Product not found", details={"productId": str(product_id)}
            )
        with transaction.atomic():
            cart = self.carts.lock_for_user(actor.id)
            line = self.cart_lines.get_for_cart_product(cart.id, product.id)
            if line:
                self.cart_lines.increment(line, quantity)
            else:
                self.cart_lines.create(
                    cart=cart,
                    product_id=product.id,
                    name=product.name,
                    price=product.price,
                    imagen=product.imagen or "",
                    quantity=quantity,
                )
            self.carts.touch(cart)
        self.logger.info(
            "Added product to cart",
            user_id=actor.id,
            product_id=product.id,
            quantity=quantity,
            merged=bool(line),
        )
        return self._to_dto(cart)

    def set_item_quantity(
        self, actor: Optional[Identity], product_id: int, quantity: int
    ) -> CartDTO:
        actor = require_authenticated(actor)
        with transaction.atomic():
            cart = self._locked_cart(actor.id)
            line = self.cart_lines.get_for_cart_product(cart.id, product_id)
            if not line:
                self.logger.info(
                    "Cart update failed: product not in cart",
                    user_id=actor.id,
                    product_id=product_id,
                )
                raise ApplicationError(
                    NOT_FOUND,
                    "Product is not in the cart",
                    details={"productId": str(product_id)},
                )
            if quantity <= 0:
                self.cart_lines.delete(line)
            else:
                self.cart_lines.update(line, quantity=quantity)
            self.carts.touch(cart)
        self.logger.info(
            "Cart line quantity set",
            user_id=actor.id,
            product_id=product_id,
            quantity=max(quantity, 0),
        )
        return self._to_dto(cart)

    def remove_item(self, actor: Optional[Identity], product_id: int) -> CartDTO:
        actor = require_authenticated(actor)
        with transaction.atomic():
            cart = self._locked_cart(actor.id)
            self.cart_lines.delete_product(cart.id, product_id)
            self.carts.touch(cart)
        self.logger.info("Removed product from cart", user_id=actor.id, product_id=product_id)
        return self._to_dto(cart)

    def clear(self, actor: Optional[Identity]) -> CartDTO:
        actor = require_authenticated(actor)
        with transaction.atomic():
            cart = self.carts.lock_for_user(actor.id)
            self.cart_lines.delete_for_cart(cart.id)
            self.carts.touch(cart)
        self.logger.info("Cart cleared", user_id=actor.id, cart_id=cart.id)
        return self._to_dto(cart)
