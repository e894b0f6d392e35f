"""
Token queue rules.

Two independent protocols share this module:

* Operation Theatre: one FIFO queue of Token records per department,
  ordered by the integer value of the token number. Advancing completes
  the active token and promotes the lowest waiting one.
* Consultation: each doctor carries a ``current_token`` label such as
  ``C-05``; calling the next patient just increments that label.

Every successful mutation appends one activity log entry and pushes a
``token_update`` to connected displays once the store lock is released.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from desk.exceptions import DoctorNotFound, MissingDepartment, NoWaitingTokens
from desk.models import ActivityLog, Doctor, Token
from desk.realtime.hub import publish
from desk.realtime.messages import TokenUpdate
from desk.serializers.queue import DoctorSerializer, TokenSerializer
from desk.services import activity, directory
from desk.store import get_store

logger = logging.getLogger(__name__)

LABEL_RE = re.compile(r'^([A-Za-z]+)-(\d+)$')
DEFAULT_PREFIX = 'C'


def _set_status(store, token_id: int, status: str) -> Token:
    completed_at = timezone.now() if status == Token.STATUS_COMPLETED else None
    return store.tokens.update(token_id, status=status, completed_at=completed_at)


def _announce(action: str, department_id: Optional[int], tokens: List[Token] = (),
              doctor: Optional[Doctor] = None, log: Optional[ActivityLog] = None) -> None:
    publish(TokenUpdate(
        action=action,
        department_id=department_id,
        tokens=TokenSerializer(list(tokens), many=True).data,
        doctor=DoctorSerializer(doctor).data if doctor is not None else None,
    ))
    if log is not None:
        activity.announce(log)


# -- reads ---------------------------------------------------------------

def all_tokens() -> List[Token]:
    return get_store().tokens.all()


def tokens_for_department(department_id: int) -> List[Token]:
    return get_store().tokens.filter(department_id=department_id)


def active_tokens() -> List[Token]:
    return get_store().tokens.filter(status=Token.STATUS_ACTIVE)


def next_token_number(department_id: int) -> str:
    numbers = [t.numeric_value for t in tokens_for_department(department_id)]
    return str(max(numbers + [0]) + 1)


# -- intake --------------------------------------------------------------

def issue_token(department_id: Optional[int], doctor_id: Optional[int] = None) -> Token:
    """Put a new patient at the back of a department's queue."""
    if not department_id:
        raise MissingDepartment()
    store = get_store()
    with store.atomic():
        dept = store.departments.get(department_id)
        if doctor_id:
            store.doctors.get(doctor_id)
        number = next_token_number(dept.id)
        token = store.tokens.create(
            number=number,
            department_id=dept.id,
            doctor_id=doctor_id or None,
            status=Token.STATUS_WAITING,
        )
        log = activity.append(
            f'New patient added to {dept.name} queue - Token {number}',
            ActivityLog.TYPE_TOKEN,
            dept.id,
        )
    _announce('issued', dept.id, [token], log=log)
    return token


# -- operation theatre ---------------------------------------------------

def advance_ot() -> Token:
    """Complete the active OT token and promote the lowest waiting one.

    The active token is completed even when nobody is waiting; the call
    then fails with :class:`NoWaitingTokens`.
    """
    store = get_store()
    changed: List[Token] = []
    promoted: Optional[Token] = None
    log = None
    with store.atomic():
        dept = directory.department_by_code(settings.DESK_OT_CODE)
        tokens = tokens_for_department(dept.id)
        current = next((t for t in tokens if t.status == Token.STATUS_ACTIVE), None)
        waiting = sorted(
            (t for t in tokens if t.status == Token.STATUS_WAITING),
            key=lambda t: t.numeric_value,
        )
        if current is not None:
            changed.append(_set_status(store, current.id, Token.STATUS_COMPLETED))
        if waiting:
            promoted = _set_status(store, waiting[0].id, Token.STATUS_ACTIVE)
            changed.append(promoted)
            log = activity.append(f'OT Token {promoted.number} now being served', ActivityLog.TYPE_TOKEN, dept.id)

    if changed:
        _announce('advance', dept.id, changed, log=log)
    if promoted is None:
        logger.info('OT advance with an empty queue')
        raise NoWaitingTokens()
    return promoted


def reset_ot() -> Tuple[str, Optional[Token]]:
    """Send every open OT token back to waiting and restart from token 1.

    Completed tokens are left alone. When no open token is numbered
    ``1`` the first open token in store order is activated instead.
    """
    store = get_store()
    with store.atomic():
        dept = directory.department_by_code(settings.DESK_OT_CODE)
        pending = [t for t in tokens_for_department(dept.id) if t.status != Token.STATUS_COMPLETED]
        reset = {t.id: _set_status(store, t.id, Token.STATUS_WAITING) for t in pending}
        first = next((t for t in pending if t.number == '1'), pending[0] if pending else None)
        if first is not None:
            first = _set_status(store, first.id, Token.STATUS_ACTIVE)
            reset[first.id] = first
            message = f'OT queue reset - starting from token {first.number}'
        else:
            message = 'OT queue reset - no open tokens'
        log = activity.append(message, ActivityLog.TYPE_TOKEN, dept.id)

    _announce('reset', dept.id, list(reset.values()), log=log)
    return 'OT queue reset successfully', first


# -- consultation --------------------------------------------------------

def next_label(current: Optional[str]) -> str:
    """``C-05`` -> ``C-06``; unset or malformed labels start again at ``C-01``."""
    match = LABEL_RE.match(current or '')
    if match:
        prefix, number = match.group(1), int(match.group(2))
    else:
        prefix, number = DEFAULT_PREFIX, 0
    return f'{prefix}-{number + 1:02d}'


def advance_doctor(doctor_id: int) -> Doctor:
    store = get_store()
    with store.atomic():
        doctor = store.doctors.get(doctor_id)
        if not doctor.is_active:
            raise DoctorNotFound()
        label = next_label(doctor.current_token)
        doctor = store.doctors.update(doctor_id, current_token=label)
        log = activity.append(
            f'{doctor.name} now serving Token {label}',
            ActivityLog.TYPE_TOKEN,
            doctor.department_id,
        )
    _announce('doctor_next', doctor.department_id, doctor=doctor, log=log)
    return doctor
