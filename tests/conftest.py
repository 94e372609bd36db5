"""
Pytest configuration and shared fixtures.
"""

import pytest

from modules.lexicon import Lexicon
from modules.ranking import SiteAuthorityTable
from services.search_api.store import SqliteDocumentStore
from tests.fixtures import LEMMAS, TOP_DOMAINS, MockClock


@pytest.fixture
def clock():
    return MockClock(start_time=1000.0)


@pytest.fixture
def lexicon():
    return Lexicon(LEMMAS)


@pytest.fixture
def authority():
    return SiteAuthorityTable(TOP_DOMAINS)


@pytest.fixture
def sqlite_store(tmp_path):
    """Empty SQLite store with the schema created."""
    store = SqliteDocumentStore(tmp_path / "search.db")
    store.init_schema()
    return store
