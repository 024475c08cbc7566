"""
Blood request lifecycle: creation by hospitals, listing, and admin
resolution with the write-back onto the hospital's user record.

Resolving a request is two writes: the request itself, then the
hospital user's request mirror (``is_request_active``,
``blood_type_needed``, ``request_pin_code``).  The request write commits
on its own.  If the mirror write cannot be made the request stays
resolved, the gap is logged and reported as ``user_synced=False``;
``manage.py repair_request_mirrors`` recomputes the mirrors afterwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from django.db import DatabaseError, transaction

from donation.exceptions import AlreadyResolved, DuplicatePending, Forbidden, InvalidInput, NotFound
from donation.models import BloodRequest, User
from donation.serializers.requests import BloodRequestSerializer
from donation.services import events
from donation.services.users import matching_donor_ids

logger = logging.getLogger(__name__)

ACTION_STATUS = {
    'approve': BloodRequest.STATUS_APPROVED,
    'deny': BloodRequest.STATUS_DENIED,
}


@dataclass
class Resolution:
    request: BloodRequest
    user_synced: bool
    changed: bool = True


def serialize_request(req: BloodRequest) -> Dict[str, Any]:
    return dict(BloodRequestSerializer(req).data)


@transaction.atomic
def create_request(data: Dict[str, Any]) -> BloodRequest:
    """File a new PENDING request for a hospital.

    The hospital's user record is left untouched; the request mirror is
    written only when an admin approves.
    """
    if data.get('userRole') != User.ROLE_HOSPITAL:
        raise Forbidden('Only Hospital accounts are allowed to create blood requests.')
    requester_id = data.get('requesterId')
    if not requester_id:
        raise InvalidInput('requesterId is required')

    requester = User.objects.filter(user_id=requester_id).first()
    if requester is not None and not requester.is_hospital:
        raise Forbidden('Only Hospital accounts are allowed to create blood requests.')

    if BloodRequest.objects.filter(requester_id=requester_id, status=BloodRequest.STATUS_PENDING).exists():
        raise DuplicatePending()

    req = BloodRequest.objects.create(
        requester_id=requester_id,
        name=data.get('name') or '',
        phone=data.get('phone') or '',
        user_role=User.ROLE_HOSPITAL,
        pin_code=data.get('pinCode') or '',
        blood_type_needed=data.get('bloodTypeNeeded') or '',
        status=BloodRequest.STATUS_PENDING,
    )
    logger.info('request %s filed by %s (%s @ %s)', req.pk, requester_id, req.blood_type_needed, req.pin_code)
    events.publish(events.NEW_REQUEST, serialize_request(req))
    return req


def list_requests(pin_code: Optional[str] = None) -> List[BloodRequest]:
    qs = BloodRequest.objects.all()
    if pin_code:
        qs = qs.filter(pin_code=pin_code)
    return list(qs.order_by('-created_at', '-id'))


def _sync_hospital_mirror(req: BloodRequest) -> bool:
    """Write the resolved request onto its hospital user.  Returns False if that fails."""
    try:
        with transaction.atomic():
            user = User.objects.filter(user_id=req.requester_id).first()
            if user is None:
                logger.warning(
                    'request %s %s but hospital user %s not found; mirror not updated',
                    req.pk, req.status, req.requester_id,
                )
                return False
            if req.status == BloodRequest.STATUS_APPROVED:
                user.mirror_request(req)
            elif user.is_request_active:
                user.clear_request_mirror()
            else:
                return True
            user.save(update_fields=['is_request_active', 'blood_type_needed', 'request_pin_code', 'updated_at'])
    except DatabaseError:
        logger.exception(
            'request %s %s but mirror update for %s failed; run repair_request_mirrors',
            req.pk, req.status, req.requester_id,
        )
        return False
    return True


def resolve_request(request_id: int, action: str) -> Resolution:
    """Approve or deny a pending request.

    Resolution is final: repeating the same action returns the request
    unchanged, the opposite action raises :class:`AlreadyResolved`.  The
    row is locked while its status is checked and written, so concurrent
    approve/deny calls serialize and the loser sees the resolved status.
    """
    new_status = ACTION_STATUS.get(action)
    if new_status is None:
        raise InvalidInput("action must be 'approve' or 'deny'")

    with transaction.atomic():
        req = BloodRequest.objects.select_for_update().filter(pk=request_id).first()
        if not req:
            raise NotFound('Request not found')
        if req.is_resolved:
            if req.status == new_status:
                return Resolution(request=req, user_synced=True, changed=False)
            raise AlreadyResolved(f'request already {req.status}')
        req.status = new_status
        req.save(update_fields=['status', 'updated_at'])
    logger.info('request %s -> %s', req.pk, req.status)

    user_synced = _sync_hospital_mirror(req)

    if req.status == BloodRequest.STATUS_APPROVED:
        events.publish(events.REQUEST_APPROVED, {
            'requestId': req.pk,
            'pinCode': req.pin_code,
            'bloodTypeNeeded': req.blood_type_needed,
            'bloodType': req.blood_type_needed,
            'donorIds': matching_donor_ids(req.pin_code, req.blood_type_needed),
        })
    else:
        events.publish(events.REQUEST_DENIED, {'requestId': req.pk})
    return Resolution(request=req, user_synced=user_synced)


def expected_mirror(requester_id: str) -> Optional[BloodRequest]:
    """The request a hospital's mirror should reflect, or None if it should be clear.

    Replays the approve/deny handlers in order: an approval sets the
    mirror, a later denial clears it.
    """
    latest = (
        BloodRequest.objects
        .filter(requester_id=requester_id)
        .exclude(status=BloodRequest.STATUS_PENDING)
        .order_by('-updated_at', '-id')
        .first()
    )
    if latest and latest.status == BloodRequest.STATUS_APPROVED:
        return latest
    return None


def repair_hospital_mirror(user: User, commit: bool = True) -> bool:
    """Recompute one hospital's mirror from its request history.  Returns True if it was stale."""
    req = expected_mirror(user.user_id)
    before = (user.is_request_active, user.blood_type_needed, user.request_pin_code)
    if req is None:
        user.clear_request_mirror()
    else:
        user.mirror_request(req)
    if (user.is_request_active, user.blood_type_needed, user.request_pin_code) == before:
        return False
    if not commit:
        return True
    user.save(update_fields=['is_request_active', 'blood_type_needed', 'request_pin_code', 'updated_at'])
    logger.info('repaired request mirror for %s', user.user_id)
    return True
