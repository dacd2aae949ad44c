"""
Pytest configuration and fixtures for option_compare
"""

import pytest

from option_compare.clock import FixedClock
from option_compare.persistence import PersistenceAdapter
from option_compare.storage import MemoryStorage
from option_compare.store import ProjectStore

from tests.factories import SequentialIds


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def persistence(storage, clock, ids):
    return PersistenceAdapter(storage, clock=clock, id_generator=ids)


@pytest.fixture
def store(persistence, clock, ids):
    """Store wired to in-memory storage with a fixed clock"""
    return ProjectStore(persistence=persistence, clock=clock, id_generator=ids)
