"""
Repository classes for database operations
Provides CRUD operations for terms, favorites and search history
"""
import time
from typing import Optional, List, Dict, Set
from sqlalchemy import select, delete, func
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from .models import TermModel, FavoriteModel, HistoryModel

TERM_COLUMNS = ("category", "es", "en", "de", "fr", "synonyms_es", "notes")


class TermRepository:
    """Repository for glossary terms"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count(self) -> int:
        """Count stored terms"""
        stmt = select(func.count()).select_from(TermModel)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists_any(self) -> bool:
        """Check whether at least one term is stored"""
        stmt = select(TermModel.id).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def get(self, term_id: str) -> Optional[TermModel]:
        """Get term by ID"""
        stmt = select(TermModel).where(TermModel.id == term_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_many(self, rows: List[Dict[str, str]]) -> int:
        """Insert or replace terms keyed by id. Returns count of distinct ids written."""
        # Last occurrence of an id wins, as with sequential replaces
        by_id = {row["id"]: row for row in rows}
        if not by_id:
            return 0

        stmt = sqlite_insert(TermModel.__table__)
        stmt = stmt.on_conflict_do_update(
            index_elements=[TermModel.__table__.c.id],
            set_={col: stmt.excluded[col] for col in TERM_COLUMNS},
        )
        await self.session.execute(stmt, list(by_id.values()))
        await self.session.flush()
        logger.debug(f"Upserted {len(by_id)} terms")
        return len(by_id)

    async def get_categories(self) -> List[str]:
        """Distinct non-empty categories, case-insensitively sorted"""
        stmt = (
            select(TermModel.category)
            .where(TermModel.category != "")
            .distinct()
            .order_by(func.casefold(TermModel.category), TermModel.category)
        )
        result = await self.session.execute(stmt)
        return [c for c in result.scalars().all() if c]

    async def get_favorites(self) -> List[TermModel]:
        """Terms joined with favorites, sorted by Spanish term"""
        stmt = (
            select(TermModel)
            .join(FavoriteModel, FavoriteModel.id == TermModel.id)
            .order_by(func.casefold(TermModel.es), TermModel.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class FavoriteRepository:
    """Repository for favorite term ids"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_ids(self) -> Set[str]:
        """Get all favorite ids"""
        result = await self.session.execute(select(FavoriteModel.id))
        return set(result.scalars().all())

    async def exists(self, term_id: str) -> bool:
        """Check if a term id is a favorite"""
        stmt = select(FavoriteModel.id).where(FavoriteModel.id == term_id).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, term_id: str) -> None:
        """Mark a term id as favorite (idempotent)"""
        stmt = sqlite_insert(FavoriteModel.__table__).values(id=term_id)
        stmt = stmt.on_conflict_do_nothing(index_elements=[FavoriteModel.__table__.c.id])
        await self.session.execute(stmt)
        await self.session.flush()

    async def remove(self, term_id: str) -> bool:
        """Remove a favorite"""
        stmt = delete(FavoriteModel).where(FavoriteModel.id == term_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0


class HistoryRepository:
    """Repository for search history entries"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def latest_ts(self) -> Optional[int]:
        """Newest stored timestamp"""
        result = await self.session.execute(select(func.max(HistoryModel.ts)))
        return result.scalar()

    async def add(self, query: str, ts: Optional[int] = None) -> HistoryModel:
        """Add an entry. Timestamps are kept strictly increasing."""
        if ts is None:
            ts = int(time.time() * 1000)
        latest = await self.latest_ts()
        if latest is not None and ts <= latest:
            ts = latest + 1

        entry = HistoryModel(query=query, ts=ts)
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def prune(self, keep: int) -> int:
        """Delete all but the `keep` most recent entries. Returns deleted count."""
        newest = select(HistoryModel.id).order_by(HistoryModel.ts.desc()).limit(keep)
        stmt = delete(HistoryModel).where(HistoryModel.id.not_in(newest))
        result = await self.session.execute(stmt)
        deleted = result.rowcount
        if deleted > 0:
            logger.debug(f"Pruned {deleted} history entries")
        return deleted

    async def get_recent(self, limit: int) -> List[HistoryModel]:
        """Most recent entries, newest first"""
        stmt = select(HistoryModel).order_by(HistoryModel.ts.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count history entries"""
        stmt = select(func.count()).select_from(HistoryModel)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def clear(self) -> int:
        """Delete all history. Returns deleted count."""
        result = await self.session.execute(delete(HistoryModel))
        return result.rowcount
