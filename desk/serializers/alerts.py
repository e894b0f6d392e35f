from rest_framework import serializers


class EmergencyAlertSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    message = serializers.CharField()
    type = serializers.CharField()
    isActive = serializers.BooleanField(source='is_active')
    createdAt = serializers.DateTimeField(source='created_at')
    dismissedAt = serializers.DateTimeField(source='dismissed_at', allow_null=True)


class AlertCreateSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=500, required=False, allow_blank=True)
    type = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
