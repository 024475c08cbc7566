import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from donation.services.events import broadcast_group

logger = logging.getLogger(__name__)


class BroadcastConsumer(AsyncWebsocketConsumer):
    """Every connected client receives every lifecycle event."""

    async def connect(self):
        self.group_name = broadcast_group()
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.debug('client connected: %s', self.channel_name)
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        # Clients only listen; anything they send gets a pong so keepalives work.
        await self.send(json.dumps({"type": "pong"}))

    async def broadcast_event(self, event):
        # event: {"type": "broadcast.event", "event": "<name>", "data": {...}}
        await self.send(json.dumps({"type": "event", "event": event.get("event"), "data": event.get("data", {})}))
