"""
Realtime broadcast of lifecycle events.

Events are pushed to every client in the broadcast group through the
Channels layer once the surrounding transaction has committed.  Delivery
is best effort: no acknowledgement, no persistence, and a failed publish
never affects the result of the call that triggered it.
"""
import logging
from typing import Any, Dict

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction

logger = logging.getLogger(__name__)

USER_REGISTERED = 'userRegistered'
NEW_REQUEST = 'newRequest'
USER_VERIFIED = 'userVerified'
REQUEST_APPROVED = 'requestApproved'
REQUEST_DENIED = 'requestDenied'
MIRRORS_REPAIRED = 'mirrorsRepaired'


def broadcast_group() -> str:
    return getattr(settings, 'BROADCAST_GROUP', 'broadcast')


def send_now(event: str, payload: Dict[str, Any]) -> bool:
    """Push one event to the broadcast group immediately.  Returns False on failure."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug('no channel layer configured, dropping %s', event)
        return False
    try:
        async_to_sync(channel_layer.group_send)(
            broadcast_group(),
            {"type": "broadcast.event", "event": event, "data": payload},
        )
    except Exception:
        logger.warning('publish of %s failed', event, exc_info=True)
        return False
    return True


def publish(event: str, payload: Dict[str, Any]) -> None:
    """Queue ``event`` for broadcast after the current transaction commits."""
    transaction.on_commit(lambda: send_now(event, payload))
