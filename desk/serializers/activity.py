from rest_framework import serializers


class ActivityLogSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    message = serializers.CharField()
    type = serializers.CharField()
    departmentId = serializers.IntegerField(source='department_id', allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at')
