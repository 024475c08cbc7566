import pytest
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from donation.realtime.consumers import BroadcastConsumer
from donation.services import events


class RecordingLayer:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def group_send(self, group, message):
        if self.fail:
            raise ConnectionError('redis down')
        self.sent.append((group, message))


def test_send_now_pushes_to_broadcast_group(monkeypatch, settings):
    settings.BROADCAST_GROUP = 'broadcast'
    layer = RecordingLayer()
    monkeypatch.setattr(events, 'get_channel_layer', lambda: layer)

    assert events.send_now('requestDenied', {'requestId': 7}) is True
    assert layer.sent == [
        ('broadcast', {'type': 'broadcast.event', 'event': 'requestDenied', 'data': {'requestId': 7}}),
    ]


def test_send_now_swallows_layer_failure(monkeypatch, caplog):
    monkeypatch.setattr(events, 'get_channel_layer', lambda: RecordingLayer(fail=True))
    with caplog.at_level('WARNING', logger='donation'):
        assert events.send_now('newRequest', {'id': 1}) is False
    assert 'newRequest' in caplog.text


def test_send_now_without_layer(monkeypatch):
    monkeypatch.setattr(events, 'get_channel_layer', lambda: None)
    assert events.send_now('newRequest', {'id': 1}) is False


@pytest.mark.django_db
def test_publish_failure_does_not_fail_the_call(monkeypatch, django_capture_on_commit_callbacks):
    from donation.models import User
    from donation.services.users import register_user

    monkeypatch.setattr(events, 'get_channel_layer', lambda: RecordingLayer(fail=True))
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        user = register_user({'phone': '777', 'userRole': 'Donor'})
    assert len(callbacks) == 1
    assert User.objects.filter(pk=user.pk).exists()


@pytest.mark.django_db
def test_publish_waits_for_commit(published, django_capture_on_commit_callbacks):
    from donation.services.users import register_user

    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        register_user({'phone': '778', 'userRole': 'Donor'})
        assert published == []
    assert len(callbacks) == 1
    callbacks[0]()
    assert published[0][0] == 'userRegistered'


@pytest.mark.asyncio
async def test_consumer_relays_broadcast_events():
    communicator = WebsocketCommunicator(BroadcastConsumer.as_asgi(), "/ws/updates/")
    connected, _ = await communicator.connect()
    assert connected
    welcome = await communicator.receive_json_from()
    assert welcome["type"] == "welcome"

    layer = get_channel_layer()
    await layer.group_send(
        events.broadcast_group(),
        {"type": "broadcast.event", "event": "userVerified", "data": {"userId": "D1", "status": "VERIFIED"}},
    )
    message = await communicator.receive_json_from()
    assert message == {"type": "event", "event": "userVerified", "data": {"userId": "D1", "status": "VERIFIED"}}

    await communicator.send_to(text_data="ping")
    assert (await communicator.receive_json_from())["type"] == "pong"
    await communicator.disconnect()
