"""
Base TTS Engine Interface
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class TTSResult:
    """TTS generation result"""
    success: bool
    audio_path: Optional[Path]
    locale: str = ""
    error: Optional[str] = None


class BaseTTSEngine(ABC):
    """Abstract base class for TTS engines"""

    @abstractmethod
    def voice_for_locale(self, locale: str) -> str:
        """Voice used for a locale such as 'es-ES'"""
        pass

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        output_path: Path,
        voice: str = None,
        rate: str = "+0%",
        pitch: str = "+0Hz"
    ) -> TTSResult:
        """Synthesize speech from text"""
        pass
