"""
Registration, phone login and donor discovery endpoints.

None of these require credentials.  Identity is established purely by
possession of a phone number.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from donation.serializers.users import DonorQuerySerializer, LoginSerializer, UserRegisterSerializer, UserSerializer
from donation.services.users import list_donors, login_user, register_user


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = UserRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = register_user(s.validated_data)
    return Response({'ok': True, 'user': UserSerializer(user).data}, status=201)

# ScopedRateThrottle reads the scope from the wrapped view class.
register_view.cls.throttle_scope = 'register'


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = login_user(s.validated_data['phone'])
    return Response({'ok': True, 'user': UserSerializer(user).data})


@api_view(['GET'])
@permission_classes([AllowAny])
def donors_view(request):
    """Verified donors by pin code (``pin`` or ``pinCode``) and optional ``bloodType``."""
    q = DonorQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    donors = list_donors(vd.get('pin') or vd.get('pinCode'), vd.get('bloodType') or None)
    return Response({'ok': True, 'donors': UserSerializer(donors, many=True).data})
