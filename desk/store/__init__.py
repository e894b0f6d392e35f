"""Process-wide access to the configured desk store."""
from __future__ import annotations

import logging
import threading
from typing import Optional

from django.conf import settings
from django.utils.module_loading import import_string

from .base import BaseStore, Collection
from .seed import seed

logger = logging.getLogger(__name__)

_store: Optional[BaseStore] = None
_guard = threading.Lock()

__all__ = ['BaseStore', 'Collection', 'get_store', 'reset_store']


def _build() -> BaseStore:
    store = import_string(settings.DESK_STORE_BACKEND)()
    if settings.DESK_SEED_DATA:
        seed(store)
    logger.info('desk store ready: %s', store.counts())
    return store


def get_store() -> BaseStore:
    global _store
    if _store is None:
        with _guard:
            if _store is None:
                _store = _build()
    return _store


def reset_store() -> BaseStore:
    """Throw away every record and start again from the seed."""
    global _store
    with _guard:
        _store = _build()
    return _store
