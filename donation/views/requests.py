"""
Blood request endpoints for hospitals and the global sync snapshot.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from donation.serializers.requests import BloodRequestSerializer, RequestCreateSerializer, RequestListQuerySerializer
from donation.services.requests import create_request, list_requests
from donation.services.sync import sync_all


@api_view(['POST'])
@permission_classes([AllowAny])
def create_request_view(request):
    """File a blood request.  Only ``userRole: Hospital`` payloads are accepted."""
    s = RequestCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    req = create_request(s.validated_data)
    return Response({'ok': True, 'request': BloodRequestSerializer(req).data}, status=201)


@api_view(['GET'])
@permission_classes([AllowAny])
def list_requests_view(request):
    q = RequestListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = list_requests(q.validated_data.get('pinCode') or None)
    return Response({'ok': True, 'requests': BloodRequestSerializer(items, many=True).data})


@api_view(['GET'])
@permission_classes([AllowAny])
def sync_storage_view(request):
    return Response({'ok': True, **sync_all()})
