from rest_framework import serializers


class LineItemSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id")
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=True)
    quantity = serializers.IntegerField()
    imagen = serializers.CharField(allow_blank=True)


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    items = LineItemSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=True)


class CartAddSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartUpdateSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    # Zero or negative removes the line.
    quantity = serializers.IntegerField()
