"""
Emergency alert endpoints.

Raising an alert pushes it to every connected display immediately;
dismissing it pushes the retired alert so displays can drop the banner.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..exceptions import InvalidAlert
from ..serializers.alerts import AlertCreateSerializer, EmergencyAlertSerializer
from ..services import alerts


@api_view(['GET', 'POST'])
def emergency_alerts(request):
    """List active alerts (``GET``) or raise a new one (``POST``)."""
    if request.method == 'GET':
        return Response(EmergencyAlertSerializer(alerts.active_alerts(), many=True).data)

    s = AlertCreateSerializer(data=request.data)
    if not s.is_valid():
        raise InvalidAlert(s.errors)
    alert = alerts.raise_alert(s.validated_data.get('message'), s.validated_data.get('type'))
    return Response(EmergencyAlertSerializer(alert).data)


@api_view(['POST'])
def dismiss_alert(request, pk: int):
    alert = alerts.dismiss_alert(pk)
    return Response(EmergencyAlertSerializer(alert).data)
