"""Text-to-Speech Package"""
from .edge_tts_engine import EdgeTTSEngine
from .base import BaseTTSEngine, TTSResult
from .speaker import TermSpeaker

__all__ = [
    "EdgeTTSEngine",
    "BaseTTSEngine",
    "TTSResult",
    "TermSpeaker",
]
