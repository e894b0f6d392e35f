import html
import logging
from typing import List, Optional

import bleach
from django.utils import timezone

from desk.exceptions import InvalidAlert
from desk.models import ActivityLog, EmergencyAlert
from desk.realtime.hub import publish
from desk.realtime.messages import EmergencyAlertUpdate
from desk.serializers.alerts import EmergencyAlertSerializer
from desk.services import activity
from desk.store import get_store

logger = logging.getLogger(__name__)


def _plain_text(value: Optional[str]) -> str:
    """Alert text with markup removed and HTML entities decoded."""
    return html.unescape(bleach.clean((value or '').strip(), tags=set(), strip=True)).strip()


def active_alerts() -> List[EmergencyAlert]:
    return [a for a in get_store().alerts.all() if a.is_active]


def raise_alert(message: Optional[str], type: Optional[str] = None) -> EmergencyAlert:
    message = _plain_text(message)
    if not message:
        raise InvalidAlert('Alert message must not be empty')
    alert_type = _plain_text(type) or EmergencyAlert.TYPE_GENERAL

    store = get_store()
    with store.atomic():
        alert = store.alerts.create(message=message, type=alert_type)
        log = activity.append(f'Emergency Alert: {alert.message}', ActivityLog.TYPE_EMERGENCY)
    logger.warning('emergency alert #%d (%s): %s', alert.id, alert.type, alert.message)
    publish(EmergencyAlertUpdate(alert=EmergencyAlertSerializer(alert).data))
    activity.announce(log)
    return alert


def dismiss_alert(alert_id: int) -> EmergencyAlert:
    """Retire an alert. Dismissals are not written to the activity log."""
    store = get_store()
    with store.atomic():
        store.alerts.get(alert_id)
        alert = store.alerts.update(alert_id, is_active=False, dismissed_at=timezone.now())
    logger.info('emergency alert #%d dismissed', alert.id)
    publish(EmergencyAlertUpdate(alert=EmergencyAlertSerializer(alert).data))
    return alert
