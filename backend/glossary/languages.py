"""
Supported Languages

Closed set of glossary languages. Each language is described by one row of
LANGUAGE_TABLE; adding a language means adding a row (and a column to the
terms table), not new dispatch code.
"""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class LanguageInfo:
    """Static description of a language"""
    code: str    # Column name in the terms table
    label: str   # Display label
    locale: str  # Speech synthesis locale


class Language(str, Enum):
    """Glossary language"""
    ES = "es"
    EN = "en"
    DE = "de"
    FR = "fr"

    @property
    def info(self) -> LanguageInfo:
        return LANGUAGE_TABLE[self]

    @property
    def label(self) -> str:
        return self.info.label

    @property
    def locale(self) -> str:
        return self.info.locale

    @classmethod
    def from_code(cls, code: str) -> "Language":
        """Resolve a language from its code (e.g. 'es'), case-insensitive"""
        try:
            return cls(code.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported language: {code!r}") from None


LANGUAGE_TABLE = {
    Language.ES: LanguageInfo(code="es", label="Español", locale="es-ES"),
    Language.EN: LanguageInfo(code="en", label="English", locale="en-US"),
    Language.DE: LanguageInfo(code="de", label="Deutsch", locale="de-DE"),
    Language.FR: LanguageInfo(code="fr", label="Français", locale="fr-FR"),
}


@dataclass(frozen=True)
class LanguagePair:
    """Translation direction shown side by side: source -> target"""
    source: Language = Language.ES
    target: Language = Language.EN

    def swapped(self) -> "LanguagePair":
        return LanguagePair(source=self.target, target=self.source)
