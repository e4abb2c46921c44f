from apps.common.repository import GenericRepository
from .models import Order, OrderLine


class OrderRepository(GenericRepository[Order]):
    ordering = ("-created_at", "-id")

    def __init__(self):
        super().__init__(Order)

    def _base_queryset(self):
        return super()._base_queryset().prefetch_related("lines")


class OrderLineRepository(GenericRepository[OrderLine]):
    ordering = ("id",)

    def __init__(self):
        super().__init__(OrderLine)

    def copy_lines(self, order: Order, lines):
        return self.model.objects.bulk_create(
            [
                OrderLine(
                    order=order,
                    product_id=line.product_id,
                    name=line.name,
                    price=line.price,
                    imagen=line.imagen,
                    quantity=line.quantity,
                )
                for line in lines
            ]
        )
