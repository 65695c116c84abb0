"""
Term Store

Async facade over the database layer. Owns every persisted collection
(terms, favorites, history) and is their only writer. Each public method runs
in its own transaction; the store serializes those transactions, so callers
never observe a partially applied operation, including the seed import.
"""
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, List, Set, Iterable, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from config import settings
from database import (
    get_db,
    get_db_lock,
    init_db,
    close_db,
    TermRepository,
    FavoriteRepository,
    HistoryRepository,
)
from .languages import Language
from .query import ALL_CATEGORIES, QueryEngine, SearchQuery
from .seed_loader import load_seed_file
from .term import Term


class TermStore:
    """
    Persistent glossary store.

    Favorites and history are pull-based: after set_favorite() or
    add_history() callers re-read favorite_ids() / get_history(); the store
    sends no change notifications.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        seed_path: Optional[Path] = None,
    ):
        self.database_url = database_url
        self.seed_path = Path(seed_path) if seed_path else settings.SEED_CSV_PATH
        self.query_engine = QueryEngine()

    async def open(self) -> None:
        """Create the schema if needed"""
        await init_db(self.database_url)

    async def close(self) -> None:
        await close_db()

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """One transaction, serialized across every store in the process"""
        async with get_db_lock():
            async with get_db() as session:
                yield session

    # Terms

    async def has_terms(self) -> bool:
        async with self._session() as session:
            return await TermRepository(session).exists_any()

    async def count_terms(self) -> int:
        async with self._session() as session:
            return await TermRepository(session).count()

    async def upsert_terms(self, terms: Iterable[Term]) -> int:
        """Insert or replace terms by id in a single transaction"""
        rows = [term.to_dict() for term in terms]
        async with self._session() as session:
            return await TermRepository(session).upsert_many(rows)

    async def import_seed_if_empty(self, seed_path: Optional[Path] = None) -> int:
        """
        Import the seed dataset unless terms are already stored.

        The seed file is read outside the store lock. The final emptiness
        check and all inserts share one transaction, so a second call, or a
        crash mid-import, never leaves a partial dataset.

        Returns:
            Number of imported terms (0 when the import was skipped)
        """
        path = Path(seed_path) if seed_path else self.seed_path
        if await self.has_terms():
            logger.debug("Terms already present, skipping seed import")
            return 0

        terms = await asyncio.to_thread(load_seed_file, path)
        if not terms:
            logger.info(f"Seed file {path} has no importable rows")
            return 0

        async with self._session() as session:
            repo = TermRepository(session)
            if await repo.exists_any():
                logger.debug("Terms imported concurrently, skipping seed import")
                return 0

            count = await repo.upsert_many([term.to_dict() for term in terms])

        logger.info(f"Imported {count} terms from {path}")
        return count

    async def get_term(self, term_id: str) -> Optional[Term]:
        async with self._session() as session:
            model = await TermRepository(session).get(term_id)
            return Term.from_model(model) if model else None

    async def list_categories(self) -> List[str]:
        """Categories for the filter menu, led by the no-filter entry"""
        async with self._session() as session:
            categories = await TermRepository(session).get_categories()
        return [ALL_CATEGORIES, *categories]

    # Search

    async def search(
        self,
        query: str,
        source_language: Language = Language.ES,
        category_filter: str = ALL_CATEGORIES,
        only_favorites: bool = False,
        limit: Optional[int] = None,
    ) -> List[Term]:
        """Search terms; see SearchQuery for the filter semantics"""
        request = SearchQuery(
            text=query or "",
            source_language=source_language,
            category=category_filter,
            only_favorites=only_favorites,
            limit=limit if limit is not None else settings.SEARCH_LIMIT,
        )
        async with self._session() as session:
            return await self.query_engine.search(session, request)

    # Favorites

    async def favorite_ids(self) -> Set[str]:
        async with self._session() as session:
            return await FavoriteRepository(session).get_ids()

    async def is_favorite(self, term_id: str) -> bool:
        async with self._session() as session:
            return await FavoriteRepository(session).exists(term_id)

    async def set_favorite(self, term_id: str, is_favorite: bool) -> None:
        """Add or remove a favorite. Idempotent."""
        async with self._session() as session:
            repo = FavoriteRepository(session)
            if is_favorite:
                await repo.add(term_id)
            else:
                await repo.remove(term_id)
        logger.debug(f"Favorite {term_id}: {is_favorite}")

    async def get_favorite_terms(self) -> List[Term]:
        async with self._session() as session:
            models = await TermRepository(session).get_favorites()
            return [Term.from_model(m) for m in models]

    # History

    async def add_history(self, query: str) -> None:
        """Record a submitted search; blank queries are ignored"""
        text = (query or "").strip()
        if not text:
            return
        async with self._session() as session:
            repo = HistoryRepository(session)
            await repo.add(text)
            await repo.prune(settings.HISTORY_KEEP)

    async def get_history(self) -> List[str]:
        """Most recent queries, newest first"""
        async with self._session() as session:
            entries = await HistoryRepository(session).get_recent(settings.HISTORY_READ_LIMIT)
        return [e.query for e in entries if e.query]

    async def count_history(self) -> int:
        async with self._session() as session:
            return await HistoryRepository(session).count()

    async def clear_history(self) -> None:
        async with self._session() as session:
            deleted = await HistoryRepository(session).clear()
        logger.info(f"Cleared {deleted} history entries")
