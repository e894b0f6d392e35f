"""Append-only activity narration shown on the staff dashboard."""
import logging
from typing import List, Optional

from django.conf import settings

from desk.models import ActivityLog
from desk.realtime.hub import publish
from desk.realtime.messages import ActivityLogEntry
from desk.serializers.activity import ActivityLogSerializer
from desk.store import get_store

logger = logging.getLogger(__name__)


def append(message: str, type: str, department_id: Optional[int] = None) -> ActivityLog:
    """Store one entry without announcing it.

    Mutating services call this inside their own ``atomic()`` block and
    announce the entry once the block is released.
    """
    if not message or not type:
        raise ValueError('activity log entries need a message and a type')
    log = get_store().activity_logs.create(message=message, type=type, department_id=department_id)
    logger.info('[%s] %s', type, message)
    return log


def announce(log: ActivityLog) -> None:
    publish(ActivityLogEntry(log=ActivityLogSerializer(log).data))


def record(message: str, type: str, department_id: Optional[int] = None) -> ActivityLog:
    log = append(message, type, department_id)
    announce(log)
    return log


def recent(limit: Optional[int] = None) -> List[ActivityLog]:
    """Newest first; entries created in the same clock tick fall back to id order."""
    if limit is None:
        limit = settings.DESK_RECENT_LOG_LIMIT
    logs = get_store().activity_logs.all()
    logs.sort(key=lambda log: (log.created_at, log.id), reverse=True)
    return logs[:max(limit, 0)]
