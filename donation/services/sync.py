from typing import Any, Dict

from donation.models import BloodRequest, User
from donation.serializers.requests import BloodRequestSerializer
from donation.serializers.users import UserSerializer


def sync_all() -> Dict[str, Any]:
    """Full snapshot of every user and request for a client rebuilding its local state."""
    return {
        'users': UserSerializer(User.objects.all(), many=True).data,
        'requests': BloodRequestSerializer(BloodRequest.objects.all(), many=True).data,
    }
