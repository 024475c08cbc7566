"""
User lifecycle: registration, phone login, donor discovery and admin
verification.
"""
import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from donation.exceptions import DuplicatePhone, DuplicateUserId, InvalidInput, NotFound
from donation.models import User
from donation.serializers.users import UserSerializer
from donation.services import events

logger = logging.getLogger(__name__)

ACTION_STATUS = {
    'approve': User.STATUS_VERIFIED,
    'deny': User.STATUS_DENIED,
}

# Wire name -> model field for the registration payload.
REGISTER_FIELDS = {
    'phone': 'phone',
    'name': 'name',
    'gender': 'gender',
    'address': 'address',
    'age': 'age',
    'weight': 'weight',
    'userRole': 'user_role',
    'bloodType': 'blood_type',
    'pinCode': 'pin_code',
    'lastDonationTime': 'last_donation_time',
    'bloodReportLink': 'blood_report_link',
}


def serialize_user(user: User) -> Dict[str, Any]:
    return dict(UserSerializer(user).data)


@transaction.atomic
def register_user(data: Dict[str, Any]) -> User:
    """Create an unverified user from validated registration data.

    The phone check is a plain lookup before insert; two concurrent
    registrations with the same phone can both pass it.
    """
    phone = data.get('phone')
    if not phone:
        raise InvalidInput('phone is required')
    if User.objects.filter(phone=phone).exists():
        raise DuplicatePhone()

    user = User(**{field: data[key] for key, field in REGISTER_FIELDS.items() if data.get(key) is not None})
    user_id = data.get('userId')
    if user_id:
        if User.objects.filter(user_id=user_id).exists():
            raise DuplicateUserId()
        user.user_id = user_id
    user.status = User.STATUS_PENDING
    user.save()

    logger.info('registered %s %s', user.user_role, user.user_id)
    events.publish(events.USER_REGISTERED, serialize_user(user))
    return user


def login_user(phone: Optional[str]) -> User:
    phone = (phone or '').strip()
    if not phone:
        raise InvalidInput('phone is required')
    user = User.objects.filter(phone=phone).order_by('id').first()
    if not user:
        raise NotFound('not found')
    return user


def list_donors(pin_code: Optional[str], blood_type: Optional[str] = None) -> List[User]:
    """Verified donors in ``pin_code``, optionally of ``blood_type``."""
    if not pin_code:
        raise InvalidInput('pin is required')
    qs = User.objects.filter(
        user_role=User.ROLE_DONOR,
        status=User.STATUS_VERIFIED,
        pin_code=pin_code,
    )
    if blood_type:
        qs = qs.filter(blood_type=blood_type)
    return list(qs)


def matching_donor_ids(pin_code: str, blood_type: str) -> List[str]:
    # A request without a locality or blood type matches nobody.
    if not pin_code or not blood_type:
        return []
    return list(
        User.objects.filter(
            user_role=User.ROLE_DONOR,
            status=User.STATUS_VERIFIED,
            pin_code=pin_code,
            blood_type=blood_type,
        ).values_list('user_id', flat=True)
    )


def list_pending_users() -> List[User]:
    return list(User.objects.filter(status=User.STATUS_PENDING))


@transaction.atomic
def set_user_status(user_id: str, action: str) -> User:
    """Verify or deny a user.  Repeating the same action is harmless."""
    new_status = ACTION_STATUS.get(action)
    if new_status is None:
        raise InvalidInput("action must be 'approve' or 'deny'")
    user = User.objects.filter(user_id=user_id).first()
    if not user:
        raise NotFound('User not found')

    if user.status != new_status:
        logger.info('user %s: %s -> %s', user.user_id, user.status, new_status)
        user.status = new_status
        user.save(update_fields=['status', 'updated_at'])

    events.publish(events.USER_VERIFIED, {'userId': user.user_id, 'status': user.status})
    return user
