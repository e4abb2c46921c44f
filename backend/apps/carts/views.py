from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import AUTHENTICATED
from apps.common import get_logger
from .container import build_cart_service
from .serializers import CartAddSerializer, CartReadSerializer, CartUpdateSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")

AUTH_ERRORS = {401: OpenApiResponse(response=ErrorResponseSerializer)}


class CartBaseView(APIView):
    access_policy = {"*": AUTHENTICATED}
    service = build_cart_service()

    def respond(self, dto):
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartView(CartBaseView):
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get my cart",
        description="Creates an empty cart on first access.",
        responses={200: CartReadSerializer, **AUTH_ERRORS},
    )
    def get(self, request):
        self.log.debug("Fetching cart", user_id=request.identity.id)
        return self.respond(self.service.get_or_create_cart(request.identity))


@extend_schema(tags=["Cart"])
class CartAddView(CartBaseView):
    log = logger.bind(view="CartAddView")

    @extend_schema(
        summary="Add product to cart",
        request=CartAddSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **AUTH_ERRORS,
        },
    )
    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.log.info(
            "Adding product to cart",
            user_id=request.identity.id,
            product_id=data["productId"],
        )
        dto = self.service.add_item(request.identity, data["productId"], data["quantity"])
        return self.respond(dto)


@extend_schema(tags=["Cart"])
class CartUpdateView(CartBaseView):
    log = logger.bind(view="CartUpdateView")

    @extend_schema(
        summary="Set cart line quantity",
        request=CartUpdateSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **AUTH_ERRORS,
        },
    )
    def put(self, request):
        serializer = CartUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        dto = self.service.set_item_quantity(
            request.identity, data["productId"], data["quantity"]
        )
        return self.respond(dto)


@extend_schema(tags=["Cart"])
class CartRemoveView(CartBaseView):
    log = logger.bind(view="CartRemoveView")

    @extend_schema(
        summary="Remove product from cart",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **AUTH_ERRORS,
        },
    )
    def delete(self, request, product_id: int):
        self.log.info(
            "Removing product from cart",
            user_id=request.identity.id,
            product_id=product_id,
        )
        return self.respond(self.service.remove_item(request.identity, product_id))


@extend_schema(tags=["Cart"])
class CartClearView(CartBaseView):
    log = logger.bind(view="CartClearView")

    @extend_schema(summary="Empty my cart", responses={200: CartReadSerializer, **AUTH_ERRORS})
    def delete(self, request):
        self.log.info("Clearing cart", user_id=request.identity.id)
        return self.respond(self.service.clear(request.identity))
