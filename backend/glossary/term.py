"""
Glossary Term

Immutable record of one culinary term and its translations.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Tuple

from .languages import Language, LanguagePair


@dataclass(frozen=True)
class Term:
    """A glossary term with one value per supported language"""
    id: str
    category: str = ""
    es: str = ""
    en: str = ""
    de: str = ""
    fr: str = ""
    synonyms_es: str = ""
    notes: str = ""

    def value_for(self, language: Language) -> str:
        """Term text in the given language"""
        return getattr(self, language.info.code)

    def translation(self, pair: LanguagePair) -> Tuple[str, str]:
        """(source text, target text) for a language pair"""
        return self.value_for(pair.source), self.value_for(pair.target)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_model(cls, model) -> "Term":
        """Create from a TermModel row"""
        return cls(**model.to_dict())
