"""
Record types for the front desk.

These are plain dataclasses rather than ORM models: every record lives
in the desk store (see :mod:`desk.store`) and nothing is persisted.
Field names follow Python conventions; the serializers render them in
the camelCase the display front-end expects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.utils import timezone


@dataclass
class Department:
    """A department that owns a token queue (e.g. ``OT``, ``CONSULT``)."""
    id: int
    name: str
    code: str
    is_active: bool = True

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


@dataclass
class Doctor:
    """A consulting doctor.

    Consultation queues are tracked on the doctor itself through
    ``current_token`` (e.g. ``"C-05"``); no Token records are created
    for them.
    """
    id: int
    name: str
    specialty: str
    department_id: Optional[int] = None
    current_token: Optional[str] = None
    is_active: bool = True
    avatar: Optional[str] = None

    def __str__(self) -> str:
        return self.name


@dataclass
class Token:
    STATUS_WAITING = 'waiting'
    STATUS_ACTIVE = 'active'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = (STATUS_WAITING, STATUS_ACTIVE, STATUS_COMPLETED)

    id: int
    # Department-scoped sequence, kept as a string
    number: str
    department_id: Optional[int] = None
    doctor_id: Optional[int] = None
    status: str = STATUS_WAITING
    created_at: datetime = field(default_factory=timezone.now)
    completed_at: Optional[datetime] = None

    @property
    def numeric_value(self) -> int:
        """Integer value of ``number``; non-numeric numbers count as 0."""
        try:
            return int(self.number)
        except (TypeError, ValueError):
            return 0


@dataclass
class Medicine:
    id: int
    name: str
    category: str
    unit: str
    current_stock: int = 0
    minimum_threshold: int = 10

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.minimum_threshold


@dataclass
class EmergencyAlert:
    TYPE_GENERAL = 'general'

    id: int
    message: str
    type: str = TYPE_GENERAL
    is_active: bool = True
    created_at: datetime = field(default_factory=timezone.now)
    dismissed_at: Optional[datetime] = None


@dataclass
class ActivityLog:
    """An append-only narration entry; never mutated after creation."""
    TYPE_TOKEN = 'token_update'
    TYPE_INVENTORY = 'inventory_update'
    TYPE_EMERGENCY = 'emergency'

    id: int
    message: str
    type: str
    department_id: Optional[int] = None
    created_at: datetime = field(default_factory=timezone.now)
