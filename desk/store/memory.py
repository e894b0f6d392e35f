"""
In-memory store: one dict per record kind plus a next-id counter.

Nothing survives a restart. Reads hand out copies so the only way to
change a record is :meth:`MemoryCollection.update`.
"""
from __future__ import annotations

import copy
import dataclasses
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Type

from ..exceptions import (
    AlertNotFound,
    DepartmentNotFound,
    DoctorNotFound,
    MedicineNotFound,
    NotFound,
    TokenNotFound,
)
from ..models import ActivityLog, Department, Doctor, EmergencyAlert, Medicine, Token
from .base import BaseStore, Collection


class MemoryCollection(Collection):
    def __init__(self, model: type, lock: threading.RLock, not_found: Type[NotFound] = NotFound):
        self.model = model
        self.not_found = not_found
        self._lock = lock
        self._rows: Dict[int, Any] = {}
        self._next_id = 1
        self._field_names = {f.name for f in dataclasses.fields(model)}

    def create(self, **fields: Any):
        with self._lock:
            row = self.model(id=self._next_id, **fields)
            self._rows[row.id] = row
            self._next_id += 1
            return copy.copy(row)

    def all(self, *, active_only: bool = False) -> List[Any]:
        with self._lock:
            rows = list(self._rows.values())
        if active_only:
            rows = [r for r in rows if getattr(r, 'is_active', True)]
        return [copy.copy(r) for r in rows]

    def get(self, pk: int):
        with self._lock:
            row = self._rows.get(pk)
            if row is None:
                raise self.not_found()
            return copy.copy(row)

    def update(self, pk: int, **changes: Any):
        unknown = set(changes) - self._field_names
        if unknown or 'id' in changes:
            raise ValueError(f'cannot update {self.model.__name__} fields: {sorted(unknown | ({"id"} & set(changes)))}')
        with self._lock:
            row = self._rows.get(pk)
            if row is None:
                raise self.not_found()
            for name, value in changes.items():
                setattr(row, name, value)
            return copy.copy(row)

    def count(self) -> int:
        with self._lock:
            return len(self._rows)


class MemoryStore(BaseStore):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.departments = MemoryCollection(Department, self._lock, DepartmentNotFound)
        self.doctors = MemoryCollection(Doctor, self._lock, DoctorNotFound)
        self.tokens = MemoryCollection(Token, self._lock, TokenNotFound)
        self.medicines = MemoryCollection(Medicine, self._lock, MedicineNotFound)
        self.alerts = MemoryCollection(EmergencyAlert, self._lock, AlertNotFound)
        self.activity_logs = MemoryCollection(ActivityLog, self._lock)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            yield
