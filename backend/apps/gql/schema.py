"""GraphQL transport over the same services the REST views call.

Resolvers stay thin: read the caller identity from ``info.context``, parse
arguments and delegate. Money is exposed as ``Float``.
"""
import graphene

from apps.auth.identity import require_admin, require_authenticated
from apps.carts.container import build_cart_service
from apps.catalog.container import build_product_service
from apps.orders.container import build_order_service
from apps.users.container import build_user_service
from .errors import parse_id, translate_errors

product_service = build_product_service()
cart_service = build_cart_service()
order_service = build_order_service()
user_service = build_user_service()


def _identity(info):
    return getattr(info.context, "identity", None)


class ProductType(graphene.ObjectType):
    id = graphene.ID(required=True)
    name = graphene.String(required=True)
    price = graphene.Float(required=True)
    description = graphene.String()
    imagen = graphene.String()
    created_at = graphene.DateTime()

    def resolve_price(parent, info):
        return float(parent.price)


class CartItemType(graphene.ObjectType):
    product_id = graphene.ID(required=True)
    name = graphene.String(required=True)
    price = graphene.Float(required=True)
    quantity = graphene.Int(required=True)
    imagen = graphene.String()
    subtotal = graphene.Float(required=True)


class CartType(graphene.ObjectType):
    id = graphene.ID(required=True)
    user_id = graphene.ID(required=True)
    items = graphene.List(graphene.NonNull(CartItemType), required=True)
    total = graphene.Float(required=True)


class OrderItemType(CartItemType):
    pass


class OrderType(graphene.ObjectType):
    id = graphene.ID(required=True)
    user_id = graphene.ID(required=True)
    username = graphene.String(required=True)
    items = graphene.List(graphene.NonNull(OrderItemType), required=True)
    total = graphene.Float(required=True)
    status = graphene.String(required=True)
    created_at = graphene.DateTime()
    updated_at = graphene.DateTime()


class UserType(graphene.ObjectType):
    id = graphene.ID(required=True)
    username = graphene.String(required=True)
    role = graphene.String(required=True)
    created_at = graphene.DateTime()


class OrderFilterInput(graphene.InputObjectType):
    status = graphene.String()
    user_id = graphene.ID()


class Query(graphene.ObjectType):
    products = graphene.List(graphene.NonNull(ProductType), required=True)
    product = graphene.Field(ProductType, id=graphene.ID(required=True))
    my_cart = graphene.Field(CartType, required=True)
    my_orders = graphene.List(graphene.NonNull(OrderType), required=True)
    orders = graphene.List(
        graphene.NonNull(OrderType), required=True, filter=OrderFilterInput()
    )
    order = graphene.Field(OrderType, id=graphene.ID(required=True))
    users = graphene.List(graphene.NonNull(UserType), required=True)
    user = graphene.Field(UserType, id=graphene.ID(required=True))

    @translate_errors
    def resolve_products(root, info):
        return product_service.list_products()

    @translate_errors
    def resolve_product(root, info, id):
        return product_service.find_product(parse_id(id))

    @translate_errors
    def resolve_my_cart(root, info):
        return cart_service.get_or_create_cart(_identity(info))

    @translate_errors
    def resolve_my_orders(root, info):
        actor = require_authenticated(_identity(info))
        return order_service.list_orders(actor, user_id=actor.id)

    @translate_errors
    def resolve_orders(root, info, filter=None):
        actor = require_admin(_identity(info))
        filter = filter or {}
        user_id = filter.get("user_id")
        return order_service.list_orders(
            actor,
            status=filter.get("status"),
            user_id=parse_id(user_id, "userId") if user_id is not None else None,
        )

    @translate_errors
    def resolve_order(root, info, id):
        return order_service.get_order(_identity(info), parse_id(id))

    @translate_errors
    def resolve_users(root, info):
        return user_service.list_users(_identity(info))

    @translate_errors
    def resolve_user(root, info, id):
        return user_service.find_user(_identity(info), parse_id(id))


class AddToCart(graphene.Mutation):
    class Arguments:
        product_id = graphene.ID(required=True)
        quantity = graphene.Int(default_value=1)

    Output = CartType

    @translate_errors
    def mutate(root, info, product_id, quantity=1):
        return cart_service.add_item(
            _identity(info), parse_id(product_id, "productId"), quantity
        )


class UpdateCartItem(graphene.Mutation):
    class Arguments:
        product_id = graphene.ID(required=True)
        quantity = graphene.Int(required=True)

    Output = CartType

    @translate_errors
    def mutate(root, info, product_id, quantity):
        return cart_service.set_item_quantity(
            _identity(info), parse_id(product_id, "productId"), quantity
        )


class RemoveFromCart(graphene.Mutation):
    class Arguments:
        product_id = graphene.ID(required=True)

    Output = CartType

    @translate_errors
    def mutate(root, info, product_id):
        return cart_service.remove_item(_identity(info), parse_id(product_id, "productId"))


class ClearCart(graphene.Mutation):
    Output = CartType

    @translate_errors
    def mutate(root, info):
        return cart_service.clear(_identity(info))


class CreateOrder(graphene.Mutation):
    Output = OrderType

    @translate_errors
    def mutate(root, info):
        return order_service.create_order(_identity(info))


class UpdateOrderStatus(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)
        status = graphene.String(required=True)

    Output = OrderType

    @translate_errors
    def mutate(root, info, id, status):
        return order_service.update_status(
            _identity(info), parse_id(id), status
        )


class UpdateUserRole(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)
        role = graphene.String(required=True)

    Output = UserType

    @translate_errors
    def mutate(root, info, id, role):
        return user_service.update_role(_identity(info), parse_id(id), role)


class Mutation(graphene.ObjectType):
    add_to_cart = AddToCart.Field()
    update_cart_item = UpdateCartItem.Field()
    remove_from_cart = RemoveFromCart.Field()
    clear_cart = ClearCart.Field()
    create_order = CreateOrder.Field()
    update_order_status = UpdateOrderStatus.Field()
    update_user_role = UpdateUserRole.Field()
    delete_user = graphene.Boolean(required=True, id=graphene.ID(required=True))

    @translate_errors
    def resolve_delete_user(root, info, id):
        user_service.delete_user(_identity(info), parse_id(id))
        return True


schema = graphene.Schema(query=Query, mutation=Mutation)
