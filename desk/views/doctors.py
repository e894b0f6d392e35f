"""
Consultation doctors.

Each doctor keeps their own running token label; there is no Token
record behind a consultation, so "next token" is a doctor operation.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.queue import DoctorListQuerySerializer, DoctorSerializer
from ..services import directory, queue


@api_view(['GET'])
def doctors(request):
    """Return active doctors.

    Query params:
      - departmentId: optional, only doctors of that department
    """
    query = DoctorListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    data = directory.active_doctors(query.validated_data.get('departmentId'))
    return Response(DoctorSerializer(data, many=True).data)


@api_view(['POST'])
def doctor_next_token(request, pk: int):
    """Call the doctor's next patient (``C-05`` -> ``C-06``)."""
    doctor = queue.advance_doctor(pk)
    return Response(DoctorSerializer(doctor).data)
