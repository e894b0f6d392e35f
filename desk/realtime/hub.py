"""
Subscriber registry for connected displays.

Each :class:`DisplayConsumer` registers its channel name here. Fan-out
goes through the channel layer one subscriber at a time, so a full or
broken channel only costs that one display: the failure is logged and
the subscriber dropped.

While at least one display is connected the hub runs two timers:

* heartbeat: every display is sent a ``ping`` frame. Displays are only
  dropped when delivery fails or their socket closes; socket liveness
  itself is left to the server's protocol-level ping (daphne
  ``--ping-interval``/``--ping-timeout``), which ends in ``disconnect``.
* sync: pushes the low-stock list (when non-empty) and a
  ``connection_status`` with the client count.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from asgiref.sync import async_to_sync, sync_to_async
from channels.layers import get_channel_layer
from django.conf import settings
from django.utils import timezone

from .messages import ConnectionStatus, Envelope, InventoryUpdate

logger = logging.getLogger(__name__)


@dataclass
class Subscriber:
    channel_name: str
    connected_at: datetime = field(default_factory=timezone.now)


class DisplayHub:
    def __init__(self, layer_factory: Callable = get_channel_layer):
        self._layer_factory = layer_factory
        self._subscribers: Dict[str, Subscriber] = {}
        self._tasks: List[asyncio.Task] = []
        self.last_sync = None

    # -- registry ---------------------------------------------------------

    @property
    def client_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, channel_name: str) -> int:
        self._subscribers[channel_name] = Subscriber(channel_name)
        logger.info('display connected (%d connected)', self.client_count)
        self._start_timers()
        return self.client_count

    def unsubscribe(self, channel_name: str) -> None:
        if self._subscribers.pop(channel_name, None) is not None:
            logger.info('display disconnected (%d connected)', self.client_count)
        if not self._subscribers:
            self._stop_timers()

    # -- delivery ---------------------------------------------------------

    async def _deliver(self, channel_name: str, event: dict) -> bool:
        layer = self._layer_factory()
        if layer is None:
            return False
        try:
            await layer.send(channel_name, event)
        except Exception:
            logger.warning('push to %s failed; dropping subscriber', channel_name, exc_info=True)
            self.unsubscribe(channel_name)
            return False
        return True

    async def broadcast(self, message: Envelope) -> int:
        """Send ``message`` to every subscriber; returns how many took it."""
        event = {'type': 'push.envelope', 'text': message.to_json()}
        delivered = 0
        for channel_name in list(self._subscribers):
            if await self._deliver(channel_name, event):
                delivered += 1
        return delivered

    # -- timers -----------------------------------------------------------

    async def heartbeat(self) -> None:
        for channel_name in list(self._subscribers):
            await self._deliver(channel_name, {'type': 'push.ping'})

    async def sync(self) -> None:
        from ..services import inventory
        from ..serializers.inventory import MedicineSerializer

        low = await sync_to_async(inventory.low_stock)()
        if low:
            await self.broadcast(InventoryUpdate(low_stock=MedicineSerializer(low, many=True).data))
        self.last_sync = timezone.now()
        await self.broadcast(ConnectionStatus(status='synced', client_count=self.client_count, last_sync=self.last_sync))

    async def _every(self, seconds: float, tick: Callable) -> None:
        while True:
            await asyncio.sleep(seconds)
            try:
                await tick()
            except Exception:
                logger.exception('%s tick failed', tick.__name__)

    def _start_timers(self) -> None:
        if self._tasks:
            return
        loop = asyncio.get_running_loop()
        self._tasks = [
            loop.create_task(self._every(settings.DESK_HEARTBEAT_SECONDS, self.heartbeat)),
            loop.create_task(self._every(settings.DESK_SYNC_SECONDS, self.sync)),
        ]

    def _stop_timers(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []


hub = DisplayHub()


def publish(message: Envelope, target: Optional[DisplayHub] = None) -> None:
    """Fire-and-forget broadcast from synchronous code (views, services)."""
    target = target or hub
    if not target.client_count:
        return
    try:
        async_to_sync(target.broadcast)(message)
    except Exception:
        logger.exception('broadcast of %s failed', message.kind)
