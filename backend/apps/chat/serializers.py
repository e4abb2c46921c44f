from rest_framework import serializers


class MessageSerializer(serializers.Serializer):
    id = serializers.CharField()
    username = serializers.CharField()
    text = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)


class MessageWriteSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=2000, allow_blank=False, trim_whitespace=True)


class MessageHistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1)
