"""
Abstract store interface.

Services only talk to a :class:`BaseStore`; the concrete backend is
chosen by ``settings.DESK_STORE_BACKEND`` so a persistent store can be
dropped in without touching callers.
"""
from __future__ import annotations

import abc
from typing import Any, ContextManager, Generic, List, TypeVar

T = TypeVar('T')


class Collection(abc.ABC, Generic[T]):
    """Keyed records of one kind with store-assigned integer ids."""

    @abc.abstractmethod
    def create(self, **fields: Any) -> T:
        """Assign the next id, apply record defaults, insert and return the record."""

    @abc.abstractmethod
    def all(self, *, active_only: bool = False) -> List[T]:
        """Every record in insertion order, optionally only ``is_active`` ones."""

    @abc.abstractmethod
    def get(self, pk: int) -> T:
        """Return the record or raise the collection's NotFound error."""

    @abc.abstractmethod
    def update(self, pk: int, **changes: Any) -> T:
        """Apply ``changes`` in place and return the updated record."""

    def filter(self, **attrs: Any) -> List[T]:
        return [row for row in self.all() if all(getattr(row, k) == v for k, v in attrs.items())]

    def count(self) -> int:
        return len(self.all())


class BaseStore(abc.ABC):
    departments: Collection
    doctors: Collection
    tokens: Collection
    medicines: Collection
    alerts: Collection
    activity_logs: Collection

    @abc.abstractmethod
    def atomic(self) -> ContextManager[None]:
        """Serialise one logical operation against every other one."""

    def counts(self) -> dict[str, int]:
        return {
            'departments': self.departments.count(),
            'doctors': self.doctors.count(),
            'tokens': self.tokens.count(),
            'medicines': self.medicines.count(),
            'alerts': self.alerts.count(),
            'activityLogs': self.activity_logs.count(),
        }
