from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, OkResponseSerializer
from apps.api.validation import ADMIN
from apps.common import get_logger
from .container import build_user_service
from .serializers import RoleUpdateSerializer, UserSerializer

logger = get_logger(__name__).bind(component="users", layer="view")

ADMIN_ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer),
    403: OpenApiResponse(response=ErrorResponseSerializer),
}


@extend_schema(tags=["Users"])
class UserListView(APIView):
    access_policy = {"*": ADMIN}
    service = build_user_service()
    log = logger.bind(view="UserListView")

    @extend_schema(
        summary="List users",
        responses={200: UserSerializer(many=True), **ADMIN_ERRORS},
    )
    def get(self, request):
        self.log.debug("Listing users via API")
        data = self.service.list_users(request.identity)
        return Response(UserSerializer(data, many=True).data)


@extend_schema(tags=["Users"])
class UserDetailView(APIView):
    access_policy = {"*": ADMIN}
    service = build_user_service()
    log = logger.bind(view="UserDetailView")

    @extend_schema(
        summary="Get user by ID",
        parameters=[OpenApiParameter("user_id", int, OpenApiParameter.PATH)],
        responses={
            200: UserSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ADMIN_ERRORS,
        },
    )
    def get(self, request, user_id: int):
        self.log.debug("Fetching user detail", user_id=user_id)
        dto = self.service.get_user(request.identity, user_id)
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Delete user",
        description="Removes the account and its cart; orders are kept.",
        responses={
            200: OkResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ADMIN_ERRORS,
        },
    )
    def delete(self, request, user_id: int):
        self.log.info("Deleting user", user_id=user_id)
        self.service.delete_user(request.identity, user_id)
        return Response({"ok": True, "message": "User deleted"})


@extend_schema(tags=["Users"])
class UserRoleView(APIView):
    access_policy = {"*": ADMIN}
    service = build_user_service()
    log = logger.bind(view="UserRoleView")

    @extend_schema(
        summary="Change user role",
        request=RoleUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ADMIN_ERRORS,
        },
    )
    def put(self, request, user_id: int):
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = serializer.validated_data["role"]
        self.log.info("Updating user role via API", user_id=user_id, role=role)
        dto = self.service.update_role(request.identity, user_id, role)
        return Response(UserSerializer(dto).data)
