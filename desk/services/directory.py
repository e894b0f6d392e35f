from typing import Optional, List

from desk.exceptions import DepartmentNotFound, ValidationFailed
from desk.models import Department, Doctor
from desk.store import get_store


def active_departments() -> List[Department]:
    return get_store().departments.all(active_only=True)


def department_by_code(code: str) -> Department:
    for dept in active_departments():
        if dept.code == code:
            return dept
    raise DepartmentNotFound(f'{code} department not found')


def register_department(name: str, code: str, *, is_active: bool = True) -> Department:
    store = get_store()
    with store.atomic():
        if store.departments.filter(code=code):
            raise ValidationFailed(f'department code {code!r} already exists')
        return store.departments.create(name=name, code=code, is_active=is_active)


def active_doctors(department_id: Optional[int] = None) -> List[Doctor]:
    doctors = get_store().doctors.all(active_only=True)
    if department_id is not None:
        doctors = [d for d in doctors if d.department_id == department_id]
    return doctors


def register_doctor(name: str, specialty: str, *, department_id: Optional[int] = None,
                    current_token: Optional[str] = None, avatar: Optional[str] = None,
                    is_active: bool = True) -> Doctor:
    store = get_store()
    with store.atomic():
        if department_id is not None:
            store.departments.get(department_id)
        return store.doctors.create(
            name=name, specialty=specialty, department_id=department_id,
            current_token=current_token, avatar=avatar, is_active=is_active,
        )
