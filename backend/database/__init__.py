"""
Database module for Diccionario Culinario
Provides SQLite-based persistence for terms, favorites and search history
"""
from .models import Base, TermModel, FavoriteModel, HistoryModel
from .repository import TermRepository, FavoriteRepository, HistoryRepository
from .connection import get_db, get_db_lock, init_db, close_db
from .errors import StorageError

__all__ = [
    "Base",
    "TermModel",
    "FavoriteModel",
    "HistoryModel",
    "TermRepository",
    "FavoriteRepository",
    "HistoryRepository",
    "get_db",
    "get_db_lock",
    "init_db",
    "close_db",
    "StorageError",
]
