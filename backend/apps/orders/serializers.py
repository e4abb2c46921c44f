from rest_framework import serializers

from apps.carts.serializers import LineItemSerializer
from .models import OrderStatus


class OrderReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    username = serializers.CharField()
    items = LineItemSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=True)
    status = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=OrderStatus.choices,
        error_messages={"invalid_choice": "Invalid status. Use 'pending' or 'completed'"},
    )


class OrderListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True)
    userId = serializers.CharField(required=False, allow_blank=True)

    def validate_status(self, value):
        # Unknown statuses are dropped rather than rejected.
        return value if value in OrderStatus.values else None

    def validate_userId(self, value):
        # Malformed ids are dropped too; non-admins are scoped to themselves anyway.
        try:
            user_id = int(value)
        except (TypeError, ValueError):
            return None
        return user_id if user_id > 0 else None
