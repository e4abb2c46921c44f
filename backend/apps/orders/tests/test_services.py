import types
import unittest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

from apps.api.exceptions import ApplicationError
from apps.auth.identity import Identity
from apps.carts.tests.fakes import DummyAtomic, FakeCartLineRepository, FakeCartRepository
from apps.orders.mappers import OrderMapper
from apps.orders.services import OrderService

ADMIN = Identity(id=1, username="admin", role="admin")
ANA = Identity(id=2, username="ana", role="usuario")
LUIS = Identity(id=3, username="luis", role="usuario")


class StubOrder:
    def __init__(self, order_id, **data):
        self.id = order_id
        self.user_id = data["user_id"]
        self.username = data["username"]
        self.total = data["total"]
        self.status = data["status"]
        self.created_at = datetime(2024, 3, 1, 12, order_id, tzinfo=timezone.utc)
        self.updated_at = self.created_at
        self.line_items = []

    @property
    def lines(self):
        owner = self

        class _Manager:
            def all(self):
                return list(owner.line_items)

        return _Manager()


class FakeOrderRepository:
    def __init__(self):
        self.storage = {}
        self._next_id = 1

    def create(self, **data):
        order = StubOrder(self._next_id, **data)
        self._next_id += 1
        self.storage[order.id] = order
        return order

    def get(self, **filters):
        return self.storage.get(filters.get("id"))

    def list(self, **filters):
        orders = [
            o for o in self.storage.values()
            if all(getattr(o, key) == value for key, value in filters.items())
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def update(self, obj, **data):
        for key, value in data.items():
            setattr(obj, key, value)
        return obj


class FakeOrderLineRepository:
    def copy_lines(self, order, lines):
        copies = [
            types.SimpleNamespace(
                product_id=line.product_id,
                name=line.name,
                price=line.price,
                imagen=line.imagen,
                quantity=line.quantity,
            )
            for line in lines
        ]
        order.line_items.extend(copies)
        return copies


class OrderServiceTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("apps.orders.services.transaction.atomic", DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)
        self.carts = FakeCartRepository()
        self.cart_lines = FakeCartLineRepository()
        self.orders = FakeOrderRepository()
        self.service = OrderService(
            orders=self.orders,
            order_lines=FakeOrderLineRepository(),
            carts=self.carts,
            cart_lines=self.cart_lines,
            order_mapper=OrderMapper(),
        )

    def fill_cart(self, identity, *lines):
        cart, _ = self.carts.get_or_create_for_user(identity.id)
        for product_id, price, quantity in lines:
            self.cart_lines.create(
                cart=cart,
                product_id=product_id,
                name=f"Product {product_id}",
                price=Decimal(price),
                imagen="",
                quantity=quantity,
            )
        return cart

    def test_checkout_copies_lines_and_empties_cart(self):
        cart = self.fill_cart(ANA, (1, "10.00", 2))
        dto = self.service.create_order(ANA)
        self.assertEqual(dto.total, Decimal("20.00"))
        self.assertEqual(dto.status, "pending")
        self.assertEqual(dto.username, "ana")
        self.assertEqual(dto.user_id, ANA.id)
        self.assertEqual([(i.product_id, i.quantity) for i in dto.items], [(1, 2)])
        self.assertEqual(self.cart_lines.list_for_cart(cart.id), [])

    def test_checkout_of_empty_or_missing_cart_is_bad_request(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.create_order(ANA)
        self.assertEqual(ctx.exception.code, "BAD_REQUEST")
        self.fill_cart(ANA)
        with self.assertRaises(ApplicationError) as ctx:
            self.service.create_order(ANA)
        self.assertEqual(ctx.exception.message, "Cart is empty")
        self.assertEqual(self.orders.storage, {})

    def test_order_snapshot_is_independent_of_cart(self):
        cart = self.fill_cart(ANA, (1, "10.00", 1))
        order = self.service.create_order(ANA)
        self.cart_lines.create(cart=cart, product_id=2, name="Other", price=Decimal("1.00"), quantity=5)
        again = self.service.get_order(ANA, order.id)
        self.assertEqual([i.product_id for i in again.items], [1])
        self.assertEqual(again.total, Decimal("10.00"))

    def test_checkout_requires_authentication(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.create_order(None)
        self.assertEqual(ctx.exception.code, "UNAUTHENTICATED")

    def test_non_admin_listing_is_scoped_to_self(self):
        self.fill_cart(ANA, (1, "10.00", 1))
        self.service.create_order(ANA)
        self.fill_cart(LUIS, (2, "5.00", 1))
        self.service.create_order(LUIS)
        mine = self.service.list_orders(LUIS, status="pending", user_id=ANA.id)
        self.assertEqual([o.username for o in mine], ["luis"])

    def test_admin_listing_filters(self):
        self.fill_cart(ANA, (1, "10.00", 1))
        first = self.service.create_order(ANA)
        self.fill_cart(LUIS, (2, "5.00", 1))
        self.service.create_order(LUIS)
        self.service.update_status(ADMIN, first.id, "completed")
        self.assertEqual(len(self.service.list_orders(ADMIN)), 2)
        completed = self.service.list_orders(ADMIN, status="completed")
        self.assertEqual([o.id for o in completed], [first.id])
        by_user = self.service.list_orders(ADMIN, user_id=LUIS.id)
        self.assertEqual([o.username for o in by_user], ["luis"])

    def test_admin_listing_is_newest_first(self):
        for identity in (ANA, LUIS):
            self.fill_cart(identity, (1, "1.00", 1))
            self.service.create_order(identity)
        self.assertEqual([o.username for o in self.service.list_orders(ADMIN)], ["luis", "ana"])

    def test_get_order_ownership(self):
        self.fill_cart(ANA, (1, "10.00", 1))
        order = self.service.create_order(ANA)
        self.assertEqual(self.service.get_order(ANA, order.id).id, order.id)
        self.assertEqual(self.service.get_order(ADMIN, order.id).id, order.id)
        with self.assertRaises(ApplicationError) as ctx:
            self.service.get_order(LUIS, order.id)
        self.assertEqual(ctx.exception.code, "FORBIDDEN")
        with self.assertRaises(ApplicationError) as ctx:
            self.service.get_order(ANA, 999)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_update_status_validates_before_lookup(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.update_status(ADMIN, 999, "shipped")
        self.assertEqual(ctx.exception.code, "BAD_REQUEST")
        with self.assertRaises(ApplicationError) as ctx:
            self.service.update_status(ADMIN, 999, "completed")
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_update_status_allows_reopening(self):
        self.fill_cart(ANA, (1, "10.00", 1))
        order = self.service.create_order(ANA)
        self.assertEqual(self.service.update_status(ADMIN, order.id, "completed").status, "completed")
        reopened = self.service.update_status(ADMIN, order.id, "pending")
        self.assertEqual(reopened.status, "pending")
        self.assertEqual(reopened.total, Decimal("10.00"))

    def test_update_status_is_admin_only(self):
        self.fill_cart(ANA, (1, "10.00", 1))
        order = self.service.create_order(ANA)
        with self.assertRaises(ApplicationError) as ctx:
            self.service.update_status(ANA, order.id, "completed")
        self.assertEqual(ctx.exception.code, "FORBIDDEN")


if __name__ == "__main__":
    unittest.main()
