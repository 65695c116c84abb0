"""
Term Speaker

Turns a piece of glossary text plus its language into a speech request for a
TTS engine. Audio files are cached per (locale, text).
"""
import hashlib
from pathlib import Path
from typing import Optional
from loguru import logger

from config import settings
from glossary.languages import Language
from glossary.term import Term
from .base import BaseTTSEngine, TTSResult


class TermSpeaker:
    """Pronounces glossary terms"""

    def __init__(
        self,
        engine: BaseTTSEngine,
        output_dir: Optional[Path] = None,
        rate: Optional[str] = None,
        pitch: Optional[str] = None,
    ):
        self.engine = engine
        self.output_dir = Path(output_dir) if output_dir else settings.SPEECH_DIR
        self.rate = rate or settings.TTS_RATE
        self.pitch = pitch or settings.TTS_PITCH

    def audio_path_for(self, text: str, locale: str) -> Path:
        digest = hashlib.sha1(f"{locale}\n{text}".encode("utf-8")).hexdigest()[:16]
        return self.output_dir / f"{locale}_{digest}.mp3"

    async def speak(self, text: str, language: Language) -> Optional[TTSResult]:
        """
        Synthesize `text` with the voice of `language`.

        Returns:
            TTSResult, or None when the text is blank
        """
        text = (text or "").strip()
        if not text:
            return None

        locale = language.locale
        output_path = self.audio_path_for(text, locale)
        if output_path.exists():
            logger.debug(f"Reusing cached speech: {output_path}")
            return TTSResult(success=True, audio_path=output_path, locale=locale)

        result = await self.engine.synthesize(
            text,
            output_path,
            voice=self.engine.voice_for_locale(locale),
            rate=self.rate,
            pitch=self.pitch,
        )
        result.locale = locale
        return result

    async def speak_term(self, term: Term, language: Language) -> Optional[TTSResult]:
        """Pronounce a term in one of its languages"""
        return await self.speak(term.value_for(language), language)
