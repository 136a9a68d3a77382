from unittest import mock

import pytest

from moodscape import analyzer as analyzer_module
from moodscape.analyzer import MoodAnalyzer, build_default_analyzer
from moodscape.backends import AnalysisBackend, AnalysisUnavailable, GroqBackend, KeywordBackend
from moodscape.heuristics import GENERIC_PROMPT

STRESSED_TEXT = "I am so stressed and anxious about this deadline, overwhelmed with pressure"


class FixedBackend(AnalysisBackend):
    name = "fixed"

    def detect_mood(self, text):
        return {"mood": "calm", "confidence": 0.9, "emotions": [], "source": self.name}

    def summarize(self, text):
        return "fixed summary"


class CrashingBackend(AnalysisBackend):
    name = "crashing"

    def detect_mood(self, text):
        raise RuntimeError("boom")

    def summarize(self, text):
        raise RuntimeError("boom")


class BrokenKeywords(KeywordBackend):
    def detect_mood(self, text):
        raise AnalysisUnavailable("broken")

    def summarize(self, text):
        raise AnalysisUnavailable("broken")

    def reflect(self, text):
        raise AnalysisUnavailable("broken")


def test_keyword_tier_is_always_last():
    analyzer = MoodAnalyzer([FixedBackend()])
    assert [b.name for b in analyzer.backends] == ["fixed", "keywords"]
    assert [b.name for b in MoodAnalyzer().backends] == ["keywords"]


def test_detects_stressed_with_heuristics_only():
    assert MoodAnalyzer().detect_mood(STRESSED_TEXT)["mood"] == "stressed"


def test_empty_text_is_neutral_and_never_raises():
    result = MoodAnalyzer([CrashingBackend()]).detect_mood("")
    assert result["mood"] == "neutral"
    assert result["confidence"] <= 0.5


def test_first_backend_wins():
    result = MoodAnalyzer([FixedBackend()]).detect_mood(STRESSED_TEXT)
    assert result["mood"] == "calm"
    assert result["source"] == "fixed"


def test_crashing_backend_falls_through_to_keywords():
    result = MoodAnalyzer([CrashingBackend()]).detect_mood(STRESSED_TEXT)
    assert result["mood"] == "stressed"
    assert result["source"] == "keywords"


def test_unreachable_remote_falls_through():
    client = mock.Mock()
    client.chat.completions.create.side_effect = ConnectionError("unreachable")
    analyzer = MoodAnalyzer([GroqBackend(api_key="test-key", client=client)])

    assert analyzer.detect_mood(STRESSED_TEXT)["mood"] == "stressed"
    client.chat.completions.create.assert_called_once()


def test_unrecognised_remote_mood_falls_through():
    client = mock.Mock()
    client.chat.completions.create.return_value.choices = [mock.Mock(message=mock.Mock(content="Hard to say."))]
    result = MoodAnalyzer([GroqBackend(api_key="test-key", client=client)]).detect_mood(STRESSED_TEXT)

    assert result["mood"] == "stressed"
    assert result["source"] == "keywords"


def test_total_failure_degrades_gracefully():
    analyzer = MoodAnalyzer([CrashingBackend(), BrokenKeywords()])
    text = "First sentence of the entry. Second sentence of the entry. Third sentence of the entry."

    assert analyzer.detect_mood(STRESSED_TEXT)["mood"] == "neutral"
    assert analyzer.summarize(text) == "First sentence of the entry. Second sentence of the entry."
    assert analyzer.reflect(text) == GENERIC_PROMPT


@pytest.mark.parametrize("text", ["", "hi", "Quick note before bed.", "y" * 49])
def test_short_text_summary_round_trips(text):
    analyzer = MoodAnalyzer([FixedBackend()])
    assert analyzer.summarize(text) == text


def test_summary_prefers_backend_output():
    analyzer = MoodAnalyzer([FixedBackend()])
    assert analyzer.summarize("z" * 80) == "fixed summary"


def test_reflect_on_empty_text():
    assert MoodAnalyzer().reflect("") == GENERIC_PROMPT


def test_run_reports_source():
    analyzer = MoodAnalyzer()

    mood = analyzer.run("detect-mood", STRESSED_TEXT)
    assert mood["result"] == "stressed"
    assert mood["source"] == "keywords"

    summary = analyzer.run("summarize", "Short entry.")
    assert summary == {"result": "Short entry.", "source": "passthrough"}

    reflection = analyzer.run("reflect", "A long day at the office")
    assert reflection["source"] == "keywords"
    assert reflection["result"]

    trend = analyzer.run("trend-analysis", entries=[
        {"date": "2024-05-13", "mood": "sad"},
        {"date": "2024-05-14", "mood": "stressed"},
        {"date": "2024-05-15", "mood": "sad"},
    ])
    assert "challenging time" in trend["result"]


def test_run_rejects_unknown_action():
    with pytest.raises(ValueError):
        MoodAnalyzer().run("translate", "text")


def test_default_chain_follows_config(monkeypatch):
    monkeypatch.setattr(analyzer_module.config, "GROQ_API_KEY", "test-key")
    monkeypatch.setattr(analyzer_module.config, "LOCAL_MODELS_ENABLED", True)
    assert [b.name for b in build_default_analyzer().backends] == ["groq", "local", "keywords"]

    monkeypatch.setattr(analyzer_module.config, "GROQ_API_KEY", None)
    monkeypatch.setattr(analyzer_module.config, "LOCAL_MODELS_ENABLED", False)
    assert [b.name for b in build_default_analyzer().backends] == ["keywords"]
