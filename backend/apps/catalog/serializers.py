from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    imagen = serializers.CharField(allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        if hasattr(instance, "__dataclass_fields__"):
            created_at = getattr(instance, "created_at", None)
            return {
                "id": instance.id,
                "name": instance.name,
                "price": instance.price,
                "description": instance.description,
                "imagen": instance.imagen,
                "createdAt": created_at.isoformat() if created_at else None,
            }
        return super().to_representation(instance)


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=False, trim_whitespace=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    imagen = serializers.CharField(
        required=False, allow_blank=True, max_length=500, default=""
    )
