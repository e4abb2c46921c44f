from decimal import Decimal
from types import SimpleNamespace

from django.test import TestCase

from apps.auth.identity import Identity
from apps.catalog.models import Product
from apps.gql.schema import schema
from apps.orders.models import Order, OrderStatus
from apps.users.models import User
from apps.users.roles import Role


class GraphQLSchemaTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(username='admin', password='admin123', role=Role.ADMIN)
        self.ana = User.objects.create_user(username='ana1', password='sobao123')
        self.product = Product.objects.create(
            name='Sobao pasiego', price=Decimal('10.50'), imagen='sobao.jpg'
        )

    def run_as(self, user, query, **variables):
        identity = Identity.from_user(user) if user else None
        return schema.execute(
            query, context_value=SimpleNamespace(identity=identity), variable_values=variables
        )

    def error_code(self, result):
        self.assertIsNotNone(result.errors)
        return result.errors[0].extensions['code']

    def test_products_are_public(self):
        result = self.run_as(None, '{ products { id name price imagen } }')
        self.assertIsNone(result.errors)
        self.assertEqual(
            result.data['products'],
            [{'id': str(self.product.id), 'name': 'Sobao pasiego', 'price': 10.5, 'imagen': 'sobao.jpg'}],
        )

    def test_missing_product_is_null(self):
        result = self.run_as(None, '{ product(id: "9999") { id } }')
        self.assertIsNone(result.errors)
        self.assertIsNone(result.data['product'])

    def test_my_cart_requires_authentication(self):
        result = self.run_as(None, '{ myCart { id } }')
        self.assertEqual(self.error_code(result), 'UNAUTHENTICATED')

    def test_cart_and_checkout_flow(self):
        add = '''
            mutation Add($productId: ID!, $quantity: Int) {
              addToCart(productId: $productId, quantity: $quantity) {
                total items { productId quantity price subtotal }
              }
            }
        '''
        result = self.run_as(self.ana, add, productId=str(self.product.id), quantity=2)
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['addToCart']['total'], 21.0)
        self.assertEqual(result.data['addToCart']['items'][0]['subtotal'], 21.0)

        result = self.run_as(self.ana, 'mutation { createOrder { total status items { quantity } } }')
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['createOrder']['status'], 'pending')
        self.assertEqual(result.data['createOrder']['total'], 21.0)

        result = self.run_as(self.ana, '{ myCart { items { productId } total } }')
        self.assertEqual(result.data['myCart'], {'items': [], 'total': 0.0})

    def test_checkout_with_empty_cart(self):
        result = self.run_as(self.ana, 'mutation { createOrder { id } }')
        self.assertEqual(self.error_code(result), 'BAD_REQUEST')

    def test_add_unknown_product(self):
        result = self.run_as(self.ana, 'mutation { addToCart(productId: "9999") { id } }')
        self.assertEqual(self.error_code(result), 'NOT_FOUND')

    def test_my_orders_only_lists_own_orders_even_for_admin(self):
        Order.objects.create(user_id=self.ana.id, username='ana1', total=Decimal('5.00'))
        Order.objects.create(user_id=self.admin.id, username='admin', total=Decimal('7.00'))
        result = self.run_as(self.admin, '{ myOrders { username } }')
        self.assertEqual(result.data['myOrders'], [{'username': 'admin'}])

    def test_orders_filter_is_admin_only(self):
        Order.objects.create(user_id=self.ana.id, username='ana1', total=Decimal('5.00'))
        Order.objects.create(
            user_id=self.ana.id, username='ana1', total=Decimal('6.00'), status=OrderStatus.COMPLETED
        )
        query = '{ orders(filter: {status: "completed"}) { total status } }'
        self.assertEqual(self.error_code(self.run_as(self.ana, query)), 'FORBIDDEN')
        result = self.run_as(self.admin, query)
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['orders'], [{'total': 6.0, 'status': 'completed'}])

    def test_order_of_another_user_is_forbidden(self):
        order = Order.objects.create(user_id=self.admin.id, username='admin', total=Decimal('5.00'))
        result = self.run_as(self.ana, '{ order(id: "%d") { id } }' % order.id)
        self.assertEqual(self.error_code(result), 'FORBIDDEN')

    def test_update_order_status(self):
        order = Order.objects.create(user_id=self.ana.id, username='ana1', total=Decimal('5.00'))
        mutation = 'mutation { updateOrderStatus(id: "%d", status: "completed") { status } }' % order.id
        self.assertEqual(self.error_code(self.run_as(self.ana, mutation)), 'FORBIDDEN')
        result = self.run_as(self.admin, mutation)
        self.assertEqual(result.data['updateOrderStatus']['status'], 'completed')
        order.refresh_from_db()
        self.assertEqual(order.status, OrderStatus.COMPLETED)

    def test_status_values_match_rest_strings(self):
        order = Order.objects.create(user_id=self.ana.id, username='ana1', total=Decimal('5.00'))
        query = 'query Orders($filter: OrderFilterInput) { orders(filter: $filter) { id status } }'
        result = self.run_as(self.admin, query, filter={'status': 'pending'})
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['orders'], [{'id': str(order.id), 'status': 'pending'}])

        mutation = 'mutation Update($id: ID!, $status: String!) { updateOrderStatus(id: $id, status: $status) { status } }'
        result = self.run_as(self.admin, mutation, id=str(order.id), status='shipped')
        self.assertEqual(self.error_code(result), 'BAD_REQUEST')
        order.refresh_from_db()
        self.assertEqual(order.status, OrderStatus.PENDING)

    def test_user_admin_operations(self):
        result = self.run_as(self.admin, '{ user(id: "9999") { id } }')
        self.assertIsNone(result.data['user'])

        mutation = 'mutation { updateUserRole(id: "%d", role: "superuser") { role } }' % self.ana.id
        self.assertEqual(self.error_code(self.run_as(self.admin, mutation)), 'BAD_REQUEST')

        mutation = 'mutation { updateUserRole(id: "%d", role: "admin") { role } }' % self.ana.id
        result = self.run_as(self.admin, mutation)
        self.assertEqual(result.data['updateUserRole']['role'], 'admin')

        result = self.run_as(self.admin, 'mutation { deleteUser(id: "%d") }' % self.admin.id)
        self.assertEqual(self.error_code(result), 'BAD_REQUEST')

        result = self.run_as(
            self.admin, 'mutation Delete($id: ID!) { deleteUser(id: $id) }', id=str(self.ana.id)
        )
        self.assertIsNone(result.errors)
        self.assertIs(result.data['deleteUser'], True)
        self.assertFalse(User.objects.filter(id=self.ana.id).exists())

    def test_users_requires_admin(self):
        self.assertEqual(self.error_code(self.run_as(self.ana, '{ users { id } }')), 'FORBIDDEN')
