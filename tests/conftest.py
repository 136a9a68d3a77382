import random
from datetime import date, timedelta

import pytest

from moodscape import app as app_module
from moodscape.analyzer import MoodAnalyzer
from moodscape.backends import KeywordBackend


@pytest.fixture
def today():
    return date(2024, 5, 15)


@pytest.fixture
def make_entry(today):
    """Build an entry dict dated `days_ago` days before the fixed today."""
    counter = {"n": 0}

    def _make(days_ago=0, mood="neutral", content="A quiet day.", **extra):
        counter["n"] += 1
        entry = {
            "id": f"entry-{counter['n']}",
            "date": (today - timedelta(days=days_ago)).isoformat(),
            "title": "",
            "content": content,
            "mood": mood,
        }
        entry.update(extra)
        return entry

    return _make


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "analyzer", MoodAnalyzer([KeywordBackend(rng=random.Random(7))]))
    monkeypatch.setattr(
        app_module,
        "analyze_sentiment",
        lambda text: {"compound": 0.0, "label": "neutral", "scores": {}},
    )
    flask_app = app_module.app
    flask_app.config["TESTING"] = True
    flask_app.config["DATA_FILE"] = str(tmp_path / "journal.json")
    with flask_app.test_client() as test_client:
        yield test_client
