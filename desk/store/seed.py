"""Demo data loaded into a fresh store when ``DESK_SEED_DATA`` is on."""
from __future__ import annotations

from ..models import Token
from .base import BaseStore

DOCTORS = [
    {
        'name': 'Dr. Sarah Johnson',
        'specialty': 'Cardiology',
        'current_token': 'C-05',
        'avatar': 'https://images.unsplash.com/photo-1612349317150-e413f6a5b16d?ixlib=rb-4.0.3&auto=format&fit=crop&w=100&h=100',
    },
    {
        'name': 'Dr. Michael Chen',
        'specialty': 'General Medicine',
        'current_token': 'G-18',
        'avatar': 'https://images.unsplash.com/photo-1559839734-2b71ea197ec2?ixlib=rb-4.0.3&auto=format&fit=crop&w=100&h=100',
    },
]

MEDICINES = [
    {'name': 'Paracetamol 500mg', 'category': 'Pain Relief', 'current_stock': 12, 'minimum_threshold': 20, 'unit': 'tablets'},
    {'name': 'Amoxicillin 250mg', 'category': 'Antibiotic', 'current_stock': 8, 'minimum_threshold': 15, 'unit': 'capsules'},
    {'name': 'Insulin Injection', 'category': 'Diabetes', 'current_stock': 3, 'minimum_threshold': 10, 'unit': 'vials'},
    {'name': 'Aspirin 75mg', 'category': 'Cardiovascular', 'current_stock': 45, 'minimum_threshold': 25, 'unit': 'tablets'},
    {'name': 'Metformin 500mg', 'category': 'Diabetes', 'current_stock': 32, 'minimum_threshold': 20, 'unit': 'tablets'},
]

# OT queue already in progress: 12 on the table, 13..20 waiting
OT_FIRST_TOKEN = 12
OT_LAST_TOKEN = 20


def seed(store: BaseStore) -> None:
    with store.atomic():
        ot = store.departments.create(name='Operation Theatre', code='OT')
        consult = store.departments.create(name='Consultation', code='CONSULT')

        for data in DOCTORS:
            store.doctors.create(department_id=consult.id, **data)

        for data in MEDICINES:
            store.medicines.create(**data)

        for n in range(OT_FIRST_TOKEN, OT_LAST_TOKEN + 1):
            store.tokens.create(
                number=str(n),
                department_id=ot.id,
                status=Token.STATUS_ACTIVE if n == OT_FIRST_TOKEN else Token.STATUS_WAITING,
            )
