from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import AUTHENTICATED
from apps.common import get_logger
from .broadcast import broadcast_message
from .container import build_chat_service
from .serializers import MessageHistoryQuerySerializer, MessageSerializer, MessageWriteSerializer

logger = get_logger(__name__).bind(component="chat", layer="view")


@extend_schema(tags=["Chat"])
class ChatMessagesView(APIView):
    access_policy = {"*": AUTHENTICATED}
    service = build_chat_service()
    log = logger.bind(view="ChatMessagesView")

    @extend_schema(
        summary="Recent chat messages",
        description="Most recent messages, oldest first.",
        parameters=[OpenApiParameter("limit", int, required=False)],
        responses={
            200: MessageSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        query = MessageHistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = self.service.list_messages(request.identity, query.validated_data.get("limit"))
        return Response(MessageSerializer(data, many=True).data)

    @extend_schema(
        summary="Post chat message",
        description="Stores the message and broadcasts it to connected websocket sessions.",
        request=MessageWriteSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = MessageWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.post_message(request.identity, serializer.validated_data["text"])
        broadcast_message(dto)
        self.log.info("Chat message posted via API", message_id=dto.id)
        return Response(MessageSerializer(dto).data, status=status.HTTP_201_CREATED)
