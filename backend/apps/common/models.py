from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class LineItem(models.Model):
    """
    Product snapshot taken when a line is added to a cart or copied into an order.

    ``product_id`` is a plain value, not a foreign key: later catalog edits or
    deletions never touch existing lines.
    """

    product_id = models.BigIntegerField()
    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    imagen = models.CharField(max_length=500, blank=True, default="")
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        abstract = True
        ordering = ["id"]

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
