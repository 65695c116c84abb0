"""
Microsoft Edge TTS Engine (Free, High Quality)
"""
from pathlib import Path
from typing import Dict, Optional
import edge_tts
from loguru import logger

from .base import BaseTTSEngine, TTSResult


class EdgeTTSEngine(BaseTTSEngine):
    """
    Microsoft Edge TTS - Free, high-quality neural voices
    One default voice per glossary locale
    """

    LOCALE_VOICES: Dict[str, str] = {
        "es-ES": "es-ES-ElviraNeural",
        "en-US": "en-US-JennyNeural",
        "de-DE": "de-DE-KatjaNeural",
        "fr-FR": "fr-FR-DeniseNeural",
    }

    def __init__(self, voices: Optional[Dict[str, str]] = None):
        self.voices = {**self.LOCALE_VOICES, **(voices or {})}
        logger.info(f"Initialized Edge TTS with voices: {sorted(self.voices.values())}")

    def voice_for_locale(self, locale: str) -> str:
        try:
            return self.voices[locale]
        except KeyError:
            raise ValueError(f"No Edge TTS voice configured for locale {locale!r}") from None

    async def synthesize(
        self,
        text: str,
        output_path: Path,
        voice: str = None,
        rate: str = "+0%",
        pitch: str = "+0Hz"
    ) -> TTSResult:
        """
        Synthesize speech from text

        Args:
            text: Text to synthesize
            output_path: Output audio file path
            voice: Voice name (e.g., es-ES-ElviraNeural)
            rate: Speech rate (e.g., +10%, -20%)
            pitch: Pitch adjustment

        Returns:
            TTSResult
        """
        try:
            if not text or not text.strip():
                return TTSResult(
                    success=False,
                    audio_path=None,
                    error="Empty text"
                )

            voice = voice or self.LOCALE_VOICES["es-ES"]

            communicate = edge_tts.Communicate(
                text,
                voice,
                rate=rate,
                pitch=pitch
            )

            # Ensure output directory exists
            output_path.parent.mkdir(parents=True, exist_ok=True)

            await communicate.save(str(output_path))

            logger.debug(f"Synthesized TTS: {output_path}")

            return TTSResult(
                success=True,
                audio_path=output_path,
            )

        except Exception as e:
            logger.error(f"TTS synthesis failed: {e}")
            return TTSResult(
                success=False,
                audio_path=None,
                error=str(e)
            )

