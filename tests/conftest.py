"""Shared fixtures: every test gets its own SQLite file."""
from pathlib import Path

import pytest

from glossary import Term, TermStore


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'diccionario.db'}"


@pytest.fixture
async def store(db_url: str):
    term_store = TermStore(database_url=db_url)
    await term_store.open()
    yield term_store
    await term_store.close()


@pytest.fixture
async def seeded_store(store: TermStore) -> TermStore:
    """Store loaded from the bundled dataset"""
    await store.import_seed_if_empty()
    return store


@pytest.fixture
def hake() -> Term:
    return Term(id="1", category="Pescados", es="merluza", en="hake")
