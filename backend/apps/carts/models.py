from django.db import models

from apps.common.models import LineItem
from apps.users.models import User


class Cart(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="cart")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Cart {self.id} for {self.user_id}"


class CartLine(LineItem):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="lines")

    class Meta(LineItem.Meta):
        db_table = "cart_lines"
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product_id"], name="cart_line_unique_product"
            ),
        ]
