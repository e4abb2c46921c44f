import unittest
from decimal import Decimal
from unittest.mock import patch

from apps.api.exceptions import ApplicationError
from apps.auth.identity import Identity
from apps.carts.mappers import CartMapper
from apps.carts.services import CartService
from apps.carts.tests.fakes import (
    DummyAtomic,
    FakeCartLineRepository,
    FakeCartRepository,
    FakeProductRepository,
    StubProduct,
)

CUSTOMER = Identity(id=7, username="pasiego", role="usuario")


class CartServiceTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("apps.carts.services.transaction.atomic", DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)
        self.products = FakeProductRepository(
            [
                StubProduct(1, "Sobao pasiego", "10.00", "sobao.jpg"),
                StubProduct(2, "Quesada", "6.25"),
            ]
        )
        self.carts = FakeCartRepository()
        self.lines = FakeCartLineRepository()
        self.service = CartService(
            carts=self.carts,
            cart_lines=self.lines,
            products=self.products,
            cart_mapper=CartMapper(),
        )

    def test_every_operation_requires_identity(self):
        calls = [
            lambda: self.service.get_or_create_cart(None),
            lambda: self.service.add_item(None, 1),
            lambda: self.service.set_item_quantity(None, 1, 2),
            lambda: self.service.remove_item(None, 1),
            lambda: self.service.clear(None),
        ]
        for call in calls:
            with self.assertRaises(ApplicationError) as ctx:
                call()
            self.assertEqual(ctx.exception.code, "UNAUTHENTICATED")

    def test_get_or_create_cart_is_lazy_and_idempotent(self):
        first = self.service.get_or_create_cart(CUSTOMER)
        second = self.service.get_or_create_cart(CUSTOMER)
        self.assertEqual(first.id, second.id)
        self.assertEqual(first.items, [])
        self.assertEqual(first.total, Decimal("0.00"))

    def test_add_to_fresh_cart_snapshots_product(self):
        dto = self.service.add_item(CUSTOMER, 1, 2)
        self.assertEqual(len(dto.items), 1)
        item = dto.items[0]
        self.assertEqual(item.product_id, 1)
        self.assertEqual(item.name, "Sobao pasiego")
        self.assertEqual(item.price, Decimal("10.00"))
        self.assertEqual(item.imagen, "sobao.jpg")
        self.assertEqual(item.quantity, 2)
        self.assertEqual(dto.total, Decimal("20.00"))

    def test_repeated_add_accumulates_quantity(self):
        self.service.add_item(CUSTOMER, 1, 1)
        dto = self.service.add_item(CUSTOMER, 1, 3)
        self.assertEqual(len(dto.items), 1)
        self.assertEqual(dto.items[0].quantity, 4)

    def test_price_change_does_not_touch_existing_line(self):
        self.service.add_item(CUSTOMER, 1, 1)
        self.products.storage[1].price = Decimal("99.00")
        dto = self.service.add_item(CUSTOMER, 1, 1)
        self.assertEqual(dto.items[0].price, Decimal("10.00"))
        self.assertEqual(dto.total, Decimal("20.00"))

    def test_total_is_sum_of_lines(self):
        self.service.add_item(CUSTOMER, 1, 2)
        dto = self.service.add_item(CUSTOMER, 2, 3)
        self.assertEqual(dto.total, Decimal("38.75"))

    def test_add_unknown_product_leaves_cart_unchanged(self):
        self.service.add_item(CUSTOMER, 1, 1)
        with self.assertRaises(ApplicationError) as ctx:
            self.service.add_item(CUSTOMER, 999, 1)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")
        dto = self.service.get_or_create_cart(CUSTOMER)
        self.assertEqual([i.product_id for i in dto.items], [1])

    def test_add_with_non_positive_quantity_is_bad_request(self):
        for quantity in (0, -2):
            with self.assertRaises(ApplicationError) as ctx:
                self.service.add_item(CUSTOMER, 1, quantity)
            self.assertEqual(ctx.exception.code, "BAD_REQUEST")
        self.assertEqual(self.lines.storage, {})

    def test_set_quantity_replaces_value(self):
        self.service.add_item(CUSTOMER, 1, 5)
        dto = self.service.set_item_quantity(CUSTOMER, 1, 2)
        self.assertEqual(dto.items[0].quantity, 2)
        self.assertEqual(dto.total, Decimal("20.00"))

    def test_set_quantity_zero_removes_line(self):
        self.service.add_item(CUSTOMER, 1, 5)
        self.service.add_item(CUSTOMER, 2, 1)
        dto = self.service.set_item_quantity(CUSTOMER, 1, 0)
        self.assertEqual([i.product_id for i in dto.items], [2])

    def test_set_quantity_without_cart_or_line_is_not_found(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.set_item_quantity(CUSTOMER, 1, 3)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")
        self.service.add_item(CUSTOMER, 1, 1)
        with self.assertRaises(ApplicationError) as ctx:
            self.service.set_item_quantity(CUSTOMER, 2, 3)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_remove_item_is_idempotent(self):
        self.service.add_item(CUSTOMER, 1, 1)
        first = self.service.remove_item(CUSTOMER, 1)
        second = self.service.remove_item(CUSTOMER, 1)
        self.assertEqual(first.items, [])
        self.assertEqual(second.items, [])

    def test_remove_item_without_cart_is_not_found(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.remove_item(CUSTOMER, 1)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_clear_creates_missing_cart_and_empties(self):
        dto = self.service.clear(CUSTOMER)
        self.assertEqual(dto.items, [])
        self.service.add_item(CUSTOMER, 1, 1)
        self.service.add_item(CUSTOMER, 2, 1)
        dto = self.service.clear(CUSTOMER)
        self.assertEqual(dto.items, [])
        self.assertEqual(dto.total, Decimal("0.00"))

    def test_carts_are_scoped_per_user(self):
        other = Identity(id=8, username="lebaniego", role="usuario")
        self.service.add_item(CUSTOMER, 1, 1)
        dto = self.service.get_or_create_cart(other)
        self.assertEqual(dto.items, [])


if __name__ == "__main__":
    unittest.main()
