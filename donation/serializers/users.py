import bleach
from rest_framework import serializers

from donation.models import User

ROLE_CHOICES = [User.ROLE_DONOR, User.ROLE_HOSPITAL]


class UserRegisterSerializer(serializers.Serializer):
    """Registration payload.  Status and request mirror fields are not accepted."""
    userId = serializers.CharField(required=False, allow_blank=True, max_length=64)
    phone = serializers.CharField(max_length=32)
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    gender = serializers.CharField(required=False, allow_blank=True, max_length=20)
    address = serializers.CharField(required=False, allow_blank=True)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    weight = serializers.FloatField(required=False, allow_null=True, min_value=0)
    userRole = serializers.ChoiceField(choices=ROLE_CHOICES)
    bloodType = serializers.CharField(required=False, allow_blank=True, max_length=5)
    pinCode = serializers.CharField(required=False, allow_blank=True, max_length=12)
    lastDonationTime = serializers.IntegerField(required=False, allow_null=True)
    bloodReportLink = serializers.CharField(required=False, allow_blank=True, max_length=500)

    def validate_phone(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('phone is required')
        return v

    def validate_name(self, v):
        return bleach.clean((v or '').strip(), tags=set(), strip=True)

    def validate_address(self, v):
        return bleach.clean((v or '').strip(), tags=set(), strip=True)

    def validate_userId(self, v):
        return (v or '').strip()

    def validate_pinCode(self, v):
        return (v or '').strip()

    def validate_bloodType(self, v):
        return (v or '').strip()


class LoginSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=32)

    def validate_phone(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('phone is required')
        return v


class DonorQuerySerializer(serializers.Serializer):
    pin = serializers.CharField(required=False, allow_blank=True, max_length=12)
    pinCode = serializers.CharField(required=False, allow_blank=True, max_length=12)
    bloodType = serializers.CharField(required=False, allow_blank=True, max_length=5)


class UserStatusActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=['approve', 'deny'])


class UserSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source='user_id')
    userRole = serializers.CharField(source='user_role')
    bloodType = serializers.CharField(source='blood_type')
    pinCode = serializers.CharField(source='pin_code')
    isRequestActive = serializers.BooleanField(source='is_request_active')
    bloodTypeNeeded = serializers.CharField(source='blood_type_needed', allow_null=True)
    requestPinCode = serializers.CharField(source='request_pin_code', allow_null=True)
    lastDonationTime = serializers.IntegerField(source='last_donation_time', allow_null=True)
    bloodReportLink = serializers.CharField(source='blood_report_link')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = User
        fields = [
            'userId', 'phone', 'name', 'gender', 'address', 'age', 'weight',
            'userRole', 'bloodType', 'pinCode', 'status',
            'isRequestActive', 'bloodTypeNeeded', 'requestPinCode',
            'lastDonationTime', 'bloodReportLink', 'createdAt', 'updatedAt',
        ]
