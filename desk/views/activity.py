from __future__ import annotations

from django.conf import settings
from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.activity import ActivityLogSerializer
from ..services import activity


@api_view(['GET'])
def activity_logs(request):
    """Most recent activity, newest first.

    ``limit`` defaults to 10; unparsable or non-positive values fall back
    to the default and large ones are capped.
    """
    try:
        limit = int(request.query_params.get('limit') or 0)
    except ValueError:
        limit = 0
    if limit < 1:
        limit = settings.DESK_RECENT_LOG_LIMIT
    limit = min(limit, settings.DESK_MAX_LOG_LIMIT)
    return Response(ActivityLogSerializer(activity.recent(limit), many=True).data)
