import types
import unittest
from decimal import Decimal

from apps.carts.mappers import CartMapper
from apps.carts.utils import compute_total


def line(product_id, price, quantity):
    return types.SimpleNamespace(
        product_id=product_id, name=f"P{product_id}", price=price, quantity=quantity, imagen=None
    )


class CartMapperTests(unittest.TestCase):
    def test_to_dto_computes_total(self):
        cart = types.SimpleNamespace(id=4, user_id=9)
        dto = CartMapper().to_dto(cart, [line(1, Decimal("10.00"), 2), line(2, Decimal("0.10"), 3)])
        self.assertEqual(dto.id, 4)
        self.assertEqual(dto.user_id, 9)
        self.assertEqual(dto.total, Decimal("20.30"))
        self.assertEqual(dto.items[1].imagen, "")

    def test_compute_total_of_nothing_is_zero(self):
        self.assertEqual(compute_total([]), Decimal("0.00"))

    def test_compute_total_rounds_to_cents(self):
        self.assertEqual(compute_total([line(1, "0.335", 1)]), Decimal("0.34"))
