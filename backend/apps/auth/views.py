from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import AUTHENTICATED
from apps.common import get_logger
from .container import build_registration_service
from .serializers import (
    LoginResponseSerializer,
    ProfileSerializer,
    RegisterRequestSerializer,
    StoreTokenObtainPairSerializer,
)

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    service = build_registration_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={
            201: ProfileSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Processing registration request",
            username=serializer.validated_data.get("username"),
        )
        result = self.service.register(serializer.validated_data)
        self.log.info("Registration completed", user_id=result["id"])
        return Response(ProfileSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=["Auth"],
    summary="Login (JWT obtain pair)",
    responses={
        200: LoginResponseSerializer,
        401: OpenApiResponse(response=ErrorResponseSerializer),
    },
)
class LoginView(TokenObtainPairView):
    serializer_class = StoreTokenObtainPairSerializer


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    pass


@extend_schema(
    tags=["Auth"],
    summary="Get current user",
    responses={
        200: ProfileSerializer,
        401: OpenApiResponse(response=ErrorResponseSerializer),
    },
)
class MeView(APIView):
    access_policy = {"*": AUTHENTICATED}
    service = build_registration_service()
    log = logger.bind(view="MeView")

    def get(self, request):
        self.log.debug("Returning current user profile", user_id=request.identity.id)
        return Response(ProfileSerializer(self.service.profile(request.identity)).data)
