"""Tests for the speech collaborator: speaker and Edge TTS adapter."""
from pathlib import Path
from typing import List

import pytest

from glossary import Language, Term
from tts import BaseTTSEngine, EdgeTTSEngine, TermSpeaker, TTSResult
from tts import edge_tts_engine


class FakeEngine(BaseTTSEngine):
    """Records calls and writes a placeholder file"""

    def __init__(self) -> None:
        self.calls: List[dict] = []

    def voice_for_locale(self, locale: str) -> str:
        return f"voice-{locale}"

    async def synthesize(self, text, output_path, voice=None, rate="+0%", pitch="+0Hz") -> TTSResult:
        self.calls.append({"text": text, "voice": voice, "rate": rate, "pitch": pitch})
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"ID3")
        return TTSResult(success=True, audio_path=output_path)


async def test_blank_text_is_not_spoken(tmp_path: Path) -> None:
    engine = FakeEngine()
    speaker = TermSpeaker(engine, output_dir=tmp_path)
    assert await speaker.speak("   ", Language.ES) is None
    assert await speaker.speak_term(Term(id="3", es="rape"), Language.DE) is None
    assert engine.calls == []


async def test_speak_uses_language_locale(tmp_path: Path) -> None:
    engine = FakeEngine()
    speaker = TermSpeaker(engine, output_dir=tmp_path, rate="-10%", pitch="+0Hz")

    result = await speaker.speak_term(Term(id="1", es="merluza", de="Seehecht"), Language.DE)

    assert result.success
    assert result.locale == "de-DE"
    assert result.audio_path.parent == tmp_path
    assert engine.calls == [{"text": "Seehecht", "voice": "voice-de-DE", "rate": "-10%", "pitch": "+0Hz"}]


async def test_speech_is_cached_per_locale_and_text(tmp_path: Path) -> None:
    engine = FakeEngine()
    speaker = TermSpeaker(engine, output_dir=tmp_path)

    first = await speaker.speak(" aubergine ", Language.EN)
    second = await speaker.speak("aubergine", Language.EN)
    other = await speaker.speak("aubergine", Language.FR)

    assert first.audio_path == second.audio_path
    assert other.audio_path != first.audio_path
    assert len(engine.calls) == 2


def test_edge_voice_table_covers_languages() -> None:
    engine = EdgeTTSEngine()
    for language in Language:
        assert engine.voice_for_locale(language.locale).startswith(language.locale)
    with pytest.raises(ValueError):
        engine.voice_for_locale("it-IT")


async def test_edge_synthesize(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    created = {}

    class FakeCommunicate:
        def __init__(self, text, voice, rate="+0%", pitch="+0Hz", **kwargs):
            created.update(text=text, voice=voice, rate=rate, pitch=pitch)

        async def save(self, path: str) -> None:
            Path(path).write_bytes(b"ID3")

    monkeypatch.setattr(edge_tts_engine.edge_tts, "Communicate", FakeCommunicate)

    output = tmp_path / "out" / "merlu.mp3"
    result = await EdgeTTSEngine().synthesize("merlu", output, voice="fr-FR-DeniseNeural", rate="-10%")

    assert result.success
    assert output.exists()
    assert created == {"text": "merlu", "voice": "fr-FR-DeniseNeural", "rate": "-10%", "pitch": "+0Hz"}


async def test_edge_failure_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenCommunicate:
        def __init__(self, *args, **kwargs):
            pass

        async def save(self, path: str) -> None:
            raise ConnectionError("offline")

    monkeypatch.setattr(edge_tts_engine.edge_tts, "Communicate", BrokenCommunicate)

    result = await EdgeTTSEngine().synthesize("merlu", tmp_path / "x.mp3")
    assert not result.success
    assert result.audio_path is None
    assert "offline" in result.error


async def test_edge_empty_text(tmp_path: Path) -> None:
    result = await EdgeTTSEngine().synthesize("  ", tmp_path / "x.mp3")
    assert not result.success
    assert result.error == "Empty text"


def test_engine_interface() -> None:
    assert BaseTTSEngine.__abstractmethods__ == {"voice_for_locale", "synthesize"}
