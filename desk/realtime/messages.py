"""
Push channel message types.

Every frame on ``ws/updates/`` is an envelope::

    {"type": "<kind>", "data": {...}, "timestamp": "<ISO 8601>"}

Each kind is its own dataclass with a typed payload; ``payload()``
renders the ``data`` member. Record payloads are already rendered by
the desk serializers, so they are plain JSON-ready dicts.
"""
from __future__ import annotations

import abc
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Dict, List, Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

TOKEN_UPDATE = 'token_update'
INVENTORY_UPDATE = 'inventory_update'
EMERGENCY_ALERT = 'emergency_alert'
ACTIVITY_LOG = 'activity_log'
CONNECTION_STATUS = 'connection_status'
REQUEST_DATA = 'request_data'

KINDS = (TOKEN_UPDATE, INVENTORY_UPDATE, EMERGENCY_ALERT, ACTIVITY_LOG, CONNECTION_STATUS, REQUEST_DATA)

Record = Dict[str, object]


def _now_iso() -> str:
    return timezone.now().isoformat()


@dataclass(frozen=True)
class Envelope(abc.ABC):
    kind: ClassVar[str]

    @abc.abstractmethod
    def payload(self) -> dict:
        """The ``data`` member of the frame."""

    def to_dict(self, timestamp: Optional[str] = None) -> dict:
        return {'type': self.kind, 'data': self.payload(), 'timestamp': timestamp or _now_iso()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), cls=DjangoJSONEncoder)


@dataclass(frozen=True)
class TokenUpdate(Envelope):
    """A queue moved: a token was issued, an OT advance/reset, or a doctor called the next patient."""
    kind: ClassVar[str] = TOKEN_UPDATE

    action: str
    department_id: Optional[int] = None
    tokens: List[Record] = field(default_factory=list)
    doctor: Optional[Record] = None

    def payload(self) -> dict:
        return {
            'action': self.action,
            'departmentId': self.department_id,
            'tokens': self.tokens,
            'doctor': self.doctor,
        }


@dataclass(frozen=True)
class InventoryUpdate(Envelope):
    kind: ClassVar[str] = INVENTORY_UPDATE

    low_stock: List[Record]
    medicine: Optional[Record] = None

    def payload(self) -> dict:
        data: dict = {'lowStockMedicines': self.low_stock}
        if self.medicine is not None:
            data['medicine'] = self.medicine
        return data


@dataclass(frozen=True)
class EmergencyAlertUpdate(Envelope):
    kind: ClassVar[str] = EMERGENCY_ALERT

    alert: Record

    def payload(self) -> dict:
        return {'alert': self.alert}


@dataclass(frozen=True)
class ActivityLogEntry(Envelope):
    kind: ClassVar[str] = ACTIVITY_LOG

    log: Record

    def payload(self) -> dict:
        return {'log': self.log}


@dataclass(frozen=True)
class ConnectionStatus(Envelope):
    kind: ClassVar[str] = CONNECTION_STATUS

    status: str
    client_count: int
    last_sync: Optional[datetime] = None

    def payload(self) -> dict:
        data: dict = {'status': self.status, 'clientCount': self.client_count}
        if self.last_sync is not None:
            data['lastSync'] = self.last_sync.isoformat()
        return data


@dataclass(frozen=True)
class Snapshot(Envelope):
    """Full current state, sent in reply to ``request_data``."""
    kind: ClassVar[str] = CONNECTION_STATUS

    departments: List[Record]
    doctors: List[Record]
    tokens: List[Record]
    medicines: List[Record]
    alerts: List[Record]
    logs: List[Record]

    def payload(self) -> dict:
        return {
            'departments': self.departments,
            'doctors': self.doctors,
            'tokens': self.tokens,
            'medicines': self.medicines,
            'alerts': self.alerts,
            'logs': self.logs,
        }


# Client -> server

@dataclass(frozen=True)
class ClientMessage:
    """A frame sent by a display; only its ``type`` is significant."""
    kind: ClassVar[str]


@dataclass(frozen=True)
class RequestData(ClientMessage):
    kind: ClassVar[str] = REQUEST_DATA


@dataclass(frozen=True)
class Ping(ClientMessage):
    """Keep-alive probe; answered with a bare ``pong`` frame, not an envelope."""
    kind: ClassVar[str] = 'ping'


_CLIENT_KINDS = {cls.kind: cls for cls in (RequestData, Ping)}


def control_frame(kind: str) -> str:
    """``ping``/``pong`` frames carry only a type and a timestamp."""
    return json.dumps({'type': kind, 'timestamp': _now_iso()})


def parse_client_message(text: str) -> ClientMessage:
    """Decode a frame sent by a display.

    Raises ``ValueError`` for anything that is not a JSON object with a
    supported ``type``.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError('invalid_json') from exc
    if not isinstance(data, dict):
        raise ValueError('invalid_payload')
    kind = data.get('type')
    if isinstance(kind, str) and kind in _CLIENT_KINDS:
        return _CLIENT_KINDS[kind]()
    raise ValueError(f'unsupported_type: {kind!r}')
