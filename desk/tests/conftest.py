import pytest

from desk.realtime.hub import hub
from desk.store import reset_store


@pytest.fixture(autouse=True)
def store():
    """A freshly seeded store for every test."""
    yield reset_store()
    hub._stop_timers()
    hub._subscribers.clear()


@pytest.fixture
def ot(store):
    return next(d for d in store.departments.all() if d.code == 'OT')


@pytest.fixture
def consult(store):
    return next(d for d in store.departments.all() if d.code == 'CONSULT')
