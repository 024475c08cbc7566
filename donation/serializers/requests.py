import bleach
from rest_framework import serializers

from donation.models import BloodRequest


class RequestCreateSerializer(serializers.Serializer):
    """Request payload.  Role and requester checks happen in the service."""
    requesterId = serializers.CharField(required=False, allow_blank=True, max_length=64)
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    userRole = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    pinCode = serializers.CharField(required=False, allow_blank=True, max_length=12)
    bloodTypeNeeded = serializers.CharField(required=False, allow_blank=True, max_length=5)

    def validate_requesterId(self, v):
        return (v or '').strip()

    def validate_name(self, v):
        return bleach.clean((v or '').strip(), tags=set(), strip=True)


class RequestListQuerySerializer(serializers.Serializer):
    pinCode = serializers.CharField(required=False, allow_blank=True, max_length=12)


class ResolveActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=['approve', 'deny'])


class BloodRequestSerializer(serializers.ModelSerializer):
    requesterId = serializers.CharField(source='requester_id')
    userRole = serializers.CharField(source='user_role')
    pinCode = serializers.CharField(source='pin_code')
    bloodTypeNeeded = serializers.CharField(source='blood_type_needed')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = BloodRequest
        fields = [
            'id', 'requesterId', 'name', 'phone', 'userRole', 'pinCode',
            'bloodTypeNeeded', 'status', 'createdAt', 'updatedAt',
        ]
