from __future__ import annotations

import pytest

from database.database import Store
from database.repository import ContentRepository
from database.utils import create_user
from services.content import ContentService


@pytest.fixture
async def store(tmp_path):
    store = Store(f"sqlite+aiosqlite:///{tmp_path / 'wall.db'}")
    await store.init_db()
    yield store
    await store.close()


@pytest.fixture
def repo(store):
    return ContentRepository(store)


@pytest.fixture
def service(repo):
    return ContentService(repo)


@pytest.fixture
async def users(store):
    """Trois auteurs : alice (1), bob (2), carol (3)."""
    alice = await create_user(store, "Alice", "Martin", "alice@example.com")
    bob = await create_user(store, "Bob", "Durand", "bob@example.com")
    carol = await create_user(store, "Carol")
    return alice, bob, carol
