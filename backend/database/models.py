"""
Database Models for Diccionario Culinario
SQLAlchemy models for persistent storage
"""
from sqlalchemy import Column, String, Integer, BigInteger, Text, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TermModel(Base):
    """Glossary term persistence model"""
    __tablename__ = "terms"

    id = Column(String(64), primary_key=True)
    category = Column(String(100), default="", nullable=False)

    # One column per supported language
    es = Column(Text, default="", nullable=False)
    en = Column(Text, default="", nullable=False)
    de = Column(Text, default="", nullable=False)
    fr = Column(Text, default="", nullable=False)

    synonyms_es = Column(Text, default="", nullable=False)
    notes = Column(Text, default="", nullable=False)

    __table_args__ = (
        Index("idx_terms_es", "es"),
        Index("idx_terms_en", "en"),
        Index("idx_terms_de", "de"),
        Index("idx_terms_fr", "fr"),
        Index("idx_terms_cat", "category"),
    )

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "category": self.category or "",
            "es": self.es or "",
            "en": self.en or "",
            "de": self.de or "",
            "fr": self.fr or "",
            "synonyms_es": self.synonyms_es or "",
            "notes": self.notes or "",
        }


class FavoriteModel(Base):
    """Favorite term ids (membership only, no foreign key)"""
    __tablename__ = "favorites"

    id = Column(String(64), primary_key=True)


class HistoryModel(Base):
    """Search history entry"""
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    query = Column(Text, nullable=False)
    ts = Column(BigInteger, nullable=False)  # Milliseconds since epoch

    __table_args__ = (
        Index("idx_history_ts", "ts"),
    )

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "query": self.query,
            "ts": self.ts,
        }
