"""Department listing for the token intake form and the displays."""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.queue import DepartmentSerializer
from ..services import directory


@api_view(['GET'])
def departments(request):
    """Return every active department."""
    return Response(DepartmentSerializer(directory.active_departments(), many=True).data)
