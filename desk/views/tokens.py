"""
Token queue endpoints.

Front-desk staff issue tokens into a department queue, and the
Operation Theatre desk advances or resets the shared OT queue.
Completing the active OT token automatically promotes the waiting
token with the lowest number.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.queue import TokenCreateSerializer, TokenSerializer
from ..services import queue


@api_view(['GET', 'POST'])
def tokens(request):
    """List every token or issue a new one.

    ``POST`` expects ``departmentId`` and optionally ``doctorId``; the
    token number is the next one in that department's sequence.
    """
    if request.method == 'GET':
        return Response(TokenSerializer(queue.all_tokens(), many=True).data)

    s = TokenCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    token = queue.issue_token(s.validated_data.get('departmentId'), s.validated_data.get('doctorId'))
    return Response(TokenSerializer(token).data)


@api_view(['GET'])
def active_tokens(request):
    """Tokens currently being served, across departments."""
    return Response(TokenSerializer(queue.active_tokens(), many=True).data)


@api_view(['GET'])
def department_tokens(request, department_id: int):
    return Response(TokenSerializer(queue.tokens_for_department(department_id), many=True).data)


@api_view(['POST'])
def ot_next(request):
    """Complete the active OT token and call the next one."""
    token = queue.advance_ot()
    return Response(TokenSerializer(token).data)


@api_view(['POST'])
def ot_reset(request):
    """Restart the OT queue from token 1."""
    message, active = queue.reset_ot()
    return Response({
        'message': message,
        'activeToken': TokenSerializer(active).data if active is not None else None,
    })
