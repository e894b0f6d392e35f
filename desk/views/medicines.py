"""Pharmacy stock endpoints."""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.inventory import MedicineSerializer, StockUpdateSerializer
from ..services import inventory


@api_view(['GET'])
def medicines(request):
    return Response(MedicineSerializer(inventory.all_medicines(), many=True).data)


@api_view(['GET'])
def low_stock(request):
    """Medicines at or below their minimum threshold."""
    return Response(MedicineSerializer(inventory.low_stock(), many=True).data)


@api_view(['POST'])
def update_stock(request, pk: int):
    """Apply a signed stock delta: ``{"quantity": 50}`` restocks, ``-5`` dispenses."""
    s = StockUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    medicine = inventory.update_stock(pk, s.validated_data['quantity'])
    return Response(MedicineSerializer(medicine).data)
