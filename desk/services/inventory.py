import logging
from typing import List

from desk.models import ActivityLog, Medicine
from desk.realtime.hub import publish
from desk.realtime.messages import InventoryUpdate
from desk.serializers.inventory import MedicineSerializer
from desk.services import activity
from desk.store import get_store

logger = logging.getLogger(__name__)


def all_medicines() -> List[Medicine]:
    return get_store().medicines.all()


def low_stock() -> List[Medicine]:
    """Medicines at or below their minimum threshold, recomputed on every call."""
    return [m for m in all_medicines() if m.is_low_stock]


def register_medicine(name: str, category: str, unit: str, *, current_stock: int = 0,
                      minimum_threshold: int = 10) -> Medicine:
    return get_store().medicines.create(
        name=name, category=category, unit=unit,
        current_stock=current_stock, minimum_threshold=minimum_threshold,
    )


def update_stock(medicine_id: int, quantity: int) -> Medicine:
    """Add a signed delta to the stock level.

    There is no floor: dispensing more than is on hand leaves a negative
    count, which shows up as low stock.
    """
    store = get_store()
    with store.atomic():
        medicine = store.medicines.get(medicine_id)
        medicine = store.medicines.update(medicine_id, current_stock=medicine.current_stock + quantity)
        sign = '+' if quantity > 0 else ''
        log = activity.append(
            f'{medicine.name} stock updated: {sign}{quantity} {medicine.unit}',
            ActivityLog.TYPE_INVENTORY,
        )
        low = low_stock()
    if medicine.current_stock < 0:
        logger.warning('%s stock is negative (%d)', medicine.name, medicine.current_stock)
    publish(InventoryUpdate(
        low_stock=MedicineSerializer(low, many=True).data,
        medicine=MedicineSerializer(medicine).data,
    ))
    activity.announce(log)
    return medicine
