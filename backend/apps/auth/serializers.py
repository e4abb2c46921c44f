from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.users.roles import Role
from apps.users.validators import (
    validate_password as validate_password_rules,
    validate_username as validate_username_rules,
)
from .identity import Identity, add_identity_claims


class RegisterRequestSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_username(self, value: str) -> str:
        return validate_username_rules(value)

    def validate_password(self, value: str) -> str:
        return validate_password_rules(value)


class ProfileSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    role = serializers.ChoiceField(choices=Role.choices)
    createdAt = serializers.DateTimeField(required=False, allow_null=True)


class SessionUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    role = serializers.ChoiceField(choices=Role.choices)


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = SessionUserSerializer()


class StoreTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Token pair whose access token carries username and role, plus the user summary."""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        return add_identity_claims(token, Identity.from_user(user))

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = {
            "id": self.user.id,
            "username": self.user.username,
            "role": self.user.role,
        }
        return data
