from rest_framework import serializers


class DepartmentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    code = serializers.CharField()
    isActive = serializers.BooleanField(source='is_active')


class DoctorSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    specialty = serializers.CharField()
    departmentId = serializers.IntegerField(source='department_id', allow_null=True)
    currentToken = serializers.CharField(source='current_token', allow_null=True)
    isActive = serializers.BooleanField(source='is_active')
    avatar = serializers.CharField(allow_null=True)


class TokenSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    number = serializers.CharField()
    departmentId = serializers.IntegerField(source='department_id', allow_null=True)
    doctorId = serializers.IntegerField(source='doctor_id', allow_null=True)
    status = serializers.CharField()
    createdAt = serializers.DateTimeField(source='created_at')
    completedAt = serializers.DateTimeField(source='completed_at', allow_null=True)


class TokenCreateSerializer(serializers.Serializer):
    departmentId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    doctorId = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class DoctorListQuerySerializer(serializers.Serializer):
    departmentId = serializers.IntegerField(min_value=1, required=False)
