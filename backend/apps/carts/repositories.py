from django.db.models import F

from apps.common.repository import GenericRepository
from .models import Cart, CartLine


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_or_create_for_user(self, user_id: int):
        return self.model.objects.get_or_create(user_id=user_id)

    def get_for_update(self, user_id: int):
        """Row-lock the user's cart; callers must be inside ``transaction.atomic``."""
        return self.model.objects.select_for_update().filter(user_id=user_id).first()

    def lock_for_user(self, user_id: int) -> Cart:
        self.get_or_create_for_user(user_id)
        return self.get_for_update(user_id)

    def touch(self, cart: Cart) -> None:
        cart.save(update_fields=["updated_at"])

    def delete_for_user(self, user_id: int) -> None:
        self.model.objects.filter(user_id=user_id).delete()


class CartLineRepository(GenericRepository[CartLine]):
    ordering = ("id",)

    def __init__(self):
        super().__init__(CartLine)

    def list_for_cart(self, cart_id: int):
        return self.list(cart_id=cart_id)

    def get_for_cart_product(self, cart_id: int, product_id: int):
        return self.get(cart_id=cart_id, product_id=product_id)

    def increment(self, line: CartLine, amount: int) -> CartLine:
        self.model.objects.filter(pk=line.pk).update(quantity=F("quantity") + amount)
        line.refresh_from_db(fields=["quantity"])
        return line

    def delete_product(self, cart_id: int, product_id: int) -> None:
        self.model.objects.filter(cart_id=cart_id, product_id=product_id).delete()

    def delete_for_cart(self, cart_id: int) -> None:
        self.model.objects.filter(cart_id=cart_id).delete()
