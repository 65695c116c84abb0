"""
Query Engine

Builds and runs filtered glossary searches. Filters are conjunctive:
category, favorites-only, and a case-insensitive substring match over every
language column plus synonyms and category. Results are ordered by the
Spanish term.
"""
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import Select, String, select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from config import settings
from database.models import TermModel, FavoriteModel
from .languages import Language
from .term import Term

# Category value meaning "no category filter"
ALL_CATEGORIES = "Todas"


def clamp_limit(limit: int) -> int:
    """Keep a requested page size within 0..SEARCH_MAX_LIMIT; 0 yields no rows"""
    return max(0, min(int(limit), settings.SEARCH_MAX_LIMIT))


@dataclass(frozen=True)
class SearchQuery:
    """Search request as issued by the UI"""
    text: str = ""
    source_language: Language = Language.ES
    category: str = ALL_CATEGORIES
    only_favorites: bool = False
    limit: int = field(default_factory=lambda: settings.SEARCH_LIMIT)

    @property
    def normalized_text(self) -> str:
        return self.text.strip().casefold()


def searchable_columns(source_language: Language) -> list:
    """Columns a free-text query is matched against"""
    return [
        getattr(TermModel, source_language.info.code),
        TermModel.es,
        TermModel.en,
        TermModel.de,
        TermModel.fr,
        TermModel.synonyms_es,
        TermModel.category,
    ]


def build_search_statement(query: SearchQuery) -> Select:
    """Translate a SearchQuery into a SELECT over terms"""
    stmt = select(TermModel)

    if query.category != ALL_CATEGORIES:
        stmt = stmt.where(TermModel.category == query.category)

    if query.only_favorites:
        stmt = stmt.where(TermModel.id.in_(select(FavoriteModel.id)))

    text = query.normalized_text
    if text:
        # autoescape keeps % and _ in the query literal
        stmt = stmt.where(or_(*[
            func.casefold(column, type_=String).contains(text, autoescape=True)
            for column in searchable_columns(query.source_language)
        ]))

    return (
        stmt.order_by(func.casefold(TermModel.es), TermModel.id)
        .limit(clamp_limit(query.limit))
    )


class QueryEngine:
    """Read-only search over the terms table"""

    async def search(self, session: AsyncSession, query: SearchQuery) -> List[Term]:
        """Run a search inside the given session"""
        result = await session.execute(build_search_statement(query))
        terms = [Term.from_model(row) for row in result.scalars().all()]
        logger.debug(
            f"Search {query.normalized_text!r} from={query.source_language.value} "
            f"category={query.category!r} favorites={query.only_favorites}: {len(terms)} results"
        )
        return terms
