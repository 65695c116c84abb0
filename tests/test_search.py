"""Tests for the query engine: filters, cross-field matching, sort and limit."""
import pytest

from config import settings
from glossary import ALL_CATEGORIES, Language, Term, TermStore
from glossary.query import SearchQuery, build_search_statement, clamp_limit
from glossary.seed_loader import load_seed_file

SEARCHABLE_FIELDS = ("es", "en", "de", "fr", "synonyms_es", "category")


async def test_cross_language_match(store: TermStore, hake: Term) -> None:
    """'hake' is English but is found while searching from Spanish."""
    await store.upsert_terms([hake])
    results = await store.search("hake", Language.ES, ALL_CATEGORIES, False)
    assert results == [hake]


async def test_only_favorites(seeded_store: TermStore) -> None:
    await seeded_store.set_favorite("1", True)
    results = await seeded_store.search("", Language.ES, ALL_CATEGORIES, only_favorites=True)
    assert [t.id for t in results] == ["1"]

    await seeded_store.set_favorite("1", False)
    assert await seeded_store.search("", only_favorites=True) == []


async def test_every_field_substring_finds_term(seeded_store: TermStore) -> None:
    terms = load_seed_file(settings.SEED_CSV_PATH)
    for term in terms:
        for field in SEARCHABLE_FIELDS:
            value = getattr(term, field).casefold()
            if not value:
                continue
            for needle in (value, value[1:], value[: max(1, len(value) // 2)]):
                if not needle.strip():
                    continue
                results = await seeded_store.search(needle.upper(), Language.FR, limit=250)
                assert term in results, (needle, field, term.id)


async def test_unicode_case_insensitive(seeded_store: TermStore) -> None:
    results = await seeded_store.search("MEJILLÓN")
    assert [t.id for t in results] == ["5"]
    results = await seeded_store.search("kreuzKÜMMEL", Language.DE)
    assert [t.id for t in results] == ["18"]


async def test_synonym_and_category_match(seeded_store: TermStore) -> None:
    assert [t.id for t in await seeded_store.search("pescadilla")] == ["1"]
    by_category = await seeded_store.search("lácteos")
    assert {t.id for t in by_category} == {"26", "27"}


async def test_category_filter_is_exact(seeded_store: TermStore) -> None:
    results = await seeded_store.search("", category_filter="Mariscos")
    assert {t.id for t in results} == {"4", "5", "6"}
    assert all(t.category == "Mariscos" for t in results)
    assert await seeded_store.search("", category_filter="mariscos") == []


async def test_filters_are_conjunctive(seeded_store: TermStore) -> None:
    await seeded_store.set_favorite("4", True)
    await seeded_store.set_favorite("11", True)
    results = await seeded_store.search("a", category_filter="Mariscos", only_favorites=True)
    assert [t.id for t in results] == ["4"]


async def test_blank_query_matches_everything_sorted(seeded_store: TermStore) -> None:
    results = await seeded_store.search("   ", limit=250)
    assert len(results) == 30
    keys = [t.es.casefold() for t in results]
    assert keys == sorted(keys)


async def test_sort_is_case_insensitive(store: TermStore) -> None:
    await store.upsert_terms([
        Term(id="a", es="Zanahoria"),
        Term(id="b", es="ajo"),
        Term(id="c", es="Berenjena"),
        Term(id="d", es="Ñora"),
        Term(id="e", es="níspero"),
    ])
    results = await store.search("")
    assert [t.es for t in results] == ["ajo", "Berenjena", "níspero", "Zanahoria", "Ñora"]


async def test_wildcards_are_literal(store: TermStore) -> None:
    await store.upsert_terms([
        Term(id="1", es="leche 100%"),
        Term(id="2", es="leche entera"),
        Term(id="3", es="aceite_oliva"),
        Term(id="4", es="aceite de oliva"),
    ])
    assert [t.id for t in await store.search("100%")] == ["1"]
    assert [t.id for t in await store.search("%")] == ["1"]
    assert [t.id for t in await store.search("e_o")] == ["3"]


async def test_limit(seeded_store: TermStore) -> None:
    assert len(await seeded_store.search("", limit=5)) == 5
    assert len(await seeded_store.search("")) == 30
    first_five = await seeded_store.search("", limit=5)
    assert first_five == (await seeded_store.search(""))[:5]


async def test_zero_or_negative_limit_returns_nothing(seeded_store: TermStore) -> None:
    assert await seeded_store.search("", limit=0) == []
    assert await seeded_store.search("merluza", limit=-1) == []


@pytest.mark.parametrize(
    "requested, expected",
    [(200, 200), (250, 250), (1000, 250), (0, 0), (-3, 0)],
)
def test_clamp_limit(requested: int, expected: int) -> None:
    assert clamp_limit(requested) == expected


def test_default_limit_from_settings() -> None:
    assert SearchQuery().limit == settings.SEARCH_LIMIT == 200


def test_statement_matches_all_language_columns() -> None:
    sql = str(build_search_statement(SearchQuery(text="x", source_language=Language.DE)))
    for column in ("terms.es", "terms.en", "terms.de", "terms.fr", "terms.synonyms_es", "terms.category"):
        assert column in sql
    assert "favorites" not in sql
