"""
Culinary Glossary

Seed import, persistent term store and multi-field search.
"""
from .languages import Language, LanguageInfo, LanguagePair, LANGUAGE_TABLE
from .term import Term
from .seed_loader import parse_seed, rows_to_terms, load_seed_file
from .query import ALL_CATEGORIES, QueryEngine, SearchQuery
from .store import TermStore

__all__ = [
    "Language",
    "LanguageInfo",
    "LanguagePair",
    "LANGUAGE_TABLE",
    "Term",
    "parse_seed",
    "rows_to_terms",
    "load_seed_file",
    "ALL_CATEGORIES",
    "QueryEngine",
    "SearchQuery",
    "TermStore",
]
