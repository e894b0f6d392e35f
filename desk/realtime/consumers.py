import logging

from asgiref.sync import sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from desk.services.snapshot import current_state

from .hub import hub
from .messages import ConnectionStatus, Ping, RequestData, control_frame, parse_client_message

logger = logging.getLogger(__name__)


class DisplayConsumer(AsyncWebsocketConsumer):
    """Push channel for waiting-room screens and staff dashboards."""
    hub = hub

    async def connect(self):
        await self.accept()
        count = self.hub.subscribe(self.channel_name)
        await self.send(text_data=ConnectionStatus(status='connected', client_count=count).to_json())

    async def disconnect(self, close_code):
        self.hub.unsubscribe(self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        if not text_data:
            return
        try:
            message = parse_client_message(text_data)
        except ValueError as exc:
            logger.warning('ignoring display frame: %s', exc)
            return

        if isinstance(message, Ping):
            await self.send(text_data=control_frame('pong'))
        elif isinstance(message, RequestData):
            snapshot = await sync_to_async(current_state)()
            await self.send(text_data=snapshot.to_json())

    # Channel layer event handlers, see DisplayHub

    async def push_envelope(self, event):
        await self.send(text_data=event['text'])

    async def push_ping(self, event):
        await self.send(text_data=control_frame('ping'))
