from rest_framework import serializers

from .roles import Role


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True, allow_null=True)


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=Role.choices,
        error_messages={"invalid_choice": "Role must be one of: usuario, admin."},
    )
