"""
Administrative endpoints: user verification and request resolution.

Every view here is wrapped by :class:`donation.permissions.AdminSecretGate`.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from donation.permissions import AdminSecretGate
from donation.serializers.requests import BloodRequestSerializer, ResolveActionSerializer
from donation.serializers.users import UserSerializer, UserStatusActionSerializer
from donation.services.requests import resolve_request
from donation.services.users import list_pending_users, set_user_status


@api_view(['GET'])
@permission_classes([AdminSecretGate])
def pending_users_view(request):
    users = list_pending_users()
    return Response({'ok': True, 'users': UserSerializer(users, many=True).data})


@api_view(['PUT', 'POST'])
@permission_classes([AdminSecretGate])
def user_status_view(request, user_id: str):
    """Body ``{"action": "approve" | "deny"}``."""
    s = UserStatusActionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = set_user_status(user_id, s.validated_data['action'])
    return Response({'ok': True, 'user': UserSerializer(user).data})


@api_view(['PUT', 'POST'])
@permission_classes([AdminSecretGate])
def approve_user_view(request, user_id: str):
    user = set_user_status(user_id, 'approve')
    return Response({'ok': True, 'user': UserSerializer(user).data})


@api_view(['PUT', 'POST'])
@permission_classes([AdminSecretGate])
def resolve_request_view(request, request_id: int):
    """Approve or deny a pending request.

    ``userSynced`` is false when the request was resolved but its
    hospital's user record could not be updated to match.
    """
    s = ResolveActionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    result = resolve_request(request_id, s.validated_data['action'])
    return Response({
        'ok': True,
        'request': BloodRequestSerializer(result.request).data,
        'userSynced': result.user_synced,
        'changed': result.changed,
    })
