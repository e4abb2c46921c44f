from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import LineItem


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"


class Order(models.Model):
    # Plain values, not a foreign key: orders outlive their owner's account.
    user_id = models.BigIntegerField()
    username = models.CharField(max_length=150)
    total = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    status = models.CharField(
        max_length=16, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user_id"], name="order_user_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["-created_at"], name="order_created_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.status}) for {self.username}"


class OrderLine(LineItem):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="lines")

    class Meta(LineItem.Meta):
        db_table = "order_lines"
