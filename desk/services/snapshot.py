from django.conf import settings

from desk.realtime.messages import Snapshot
from desk.serializers.activity import ActivityLogSerializer
from desk.serializers.alerts import EmergencyAlertSerializer
from desk.serializers.inventory import MedicineSerializer
from desk.serializers.queue import DepartmentSerializer, DoctorSerializer, TokenSerializer
from desk.services import activity, alerts, directory, inventory, queue
from desk.store import get_store


def current_state() -> Snapshot:
    """Everything a display needs to draw itself from scratch."""
    with get_store().atomic():
        return Snapshot(
            departments=DepartmentSerializer(directory.active_departments(), many=True).data,
            doctors=DoctorSerializer(directory.active_doctors(), many=True).data,
            tokens=TokenSerializer(queue.all_tokens(), many=True).data,
            medicines=MedicineSerializer(inventory.all_medicines(), many=True).data,
            alerts=EmergencyAlertSerializer(alerts.active_alerts(), many=True).data,
            logs=ActivityLogSerializer(activity.recent(settings.DESK_SNAPSHOT_LOG_LIMIT), many=True).data,
        )
