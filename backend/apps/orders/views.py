from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import ADMIN, AUTHENTICATED
from apps.common import get_logger
from .container import build_order_service
from .serializers import OrderListQuerySerializer, OrderReadSerializer, OrderStatusSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    access_policy = {"*": AUTHENTICATED}
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        operation_id="orders_list",
        summary="List orders",
        description=(
            "Regular users always get their own orders. Admins may filter by "
            "status and userId; unknown status values are ignored."
        ),
        parameters=[
            OpenApiParameter("status", str, required=False, enum=["pending", "completed"]),
            OpenApiParameter("userId", int, required=False),
        ],
        responses={
            200: OrderReadSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        query = OrderListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        self.log.debug("Listing orders via API", user_id=request.identity.id)
        data = self.service.list_orders(
            request.identity,
            status=params.get("status"),
            user_id=params.get("userId"),
        )
        return Response(OrderReadSerializer(data, many=True).data)

    @extend_schema(
        summary="Create order from my cart",
        request=None,
        responses={
            201: OrderReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        self.log.info("Checking out cart", user_id=request.identity.id)
        dto = self.service.create_order(request.identity)
        return Response(OrderReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    access_policy = {"*": AUTHENTICATED}
    service = build_order_service()
    log = logger.bind(view="OrderDetailView")

    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", int, OpenApiParameter.PATH)],
        responses={
            200: OrderReadSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, order_id: int):
        self.log.debug("Fetching order detail", order_id=order_id)
        return Response(OrderReadSerializer(self.service.get_order(request.identity, order_id)).data)


@extend_schema(tags=["Orders"])
class OrderStatusView(APIView):
    access_policy = {"*": ADMIN}
    service = build_order_service()
    log = logger.bind(view="OrderStatusView")

    @extend_schema(
        summary="Update order status",
        request=OrderStatusSerializer,
        responses={
            200: OrderReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, order_id: int):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]
        self.log.info("Updating order status via API", order_id=order_id, status=new_status)
        dto = self.service.update_status(request.identity, order_id, new_status)
        return Response(OrderReadSerializer(dto).data)
