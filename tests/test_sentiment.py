import pytest

from moodscape import sentiment
from moodscape.providers import ModelProvider


class FakeAnalyzer:
    def __init__(self, compound):
        self.compound = compound

    def polarity_scores(self, text):
        return {"compound": self.compound, "pos": 0.4, "neg": 0.1, "neu": 0.5}


@pytest.mark.parametrize("compound,label", [
    (0.8, "very_positive"),
    (0.3, "positive"),
    (0.0, "neutral"),
    (-0.3, "negative"),
    (-0.9, "very_negative"),
])
def test_sentiment_labels(monkeypatch, compound, label):
    monkeypatch.setattr(sentiment, "vader_provider", ModelProvider("fake", lambda: FakeAnalyzer(compound)))
    result = sentiment.analyze_sentiment("Some text to score")

    assert result["label"] == label
    assert result["compound"] == compound
    assert result["scores"] == {"positive": 0.4, "negative": 0.1, "neutral": 0.5}


def test_missing_lexicon_is_neutral(monkeypatch):
    def broken():
        raise LookupError("vader_lexicon not found")

    monkeypatch.setattr(sentiment, "vader_provider", ModelProvider("fake", broken))
    assert sentiment.analyze_sentiment("Some text")["label"] == "neutral"


def test_empty_text_is_neutral():
    assert sentiment.analyze_sentiment("   ") == {"compound": 0.0, "label": "neutral", "scores": {}}


def test_extract_themes():
    themes = sentiment.extract_themes("Long meeting with my boss, then dinner with family")
    assert "work" in themes
    assert "family" in themes
    assert sentiment.extract_themes("") == []


def test_empathetic_response():
    assert "pressure" in sentiment.empathetic_response("stressed")
    assert sentiment.empathetic_response("unknown") == "Thank you for journaling today."
