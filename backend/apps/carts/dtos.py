from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass
class LineItemDTO:
    product_id: int
    name: str
    price: Decimal
    quantity: int
    imagen: str = ""

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class CartDTO:
    id: int
    user_id: int
    items: List[LineItemDTO] = field(default_factory=list)
    total: Decimal = Decimal("0.00")
