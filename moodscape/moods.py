"""
Mood vocabulary shared by the analyzer, the trend report and the API.
"""

from typing import Any, Dict, List, Optional

NEUTRAL = "neutral"

MOOD_OPTIONS: List[Dict[str, str]] = [
    {"value": "happy", "label": "Happy", "emoji": "😊"},
    {"value": "sad", "label": "Sad", "emoji": "😔"},
    {"value": "excited", "label": "Excited", "emoji": "🤩"},
    {"value": "calm", "label": "Calm", "emoji": "😌"},
    {"value": "stressed", "label": "Stressed", "emoji": "😫"},
    {"value": "neutral", "label": "Neutral", "emoji": "😐"},
]

MOOD_LABELS = [option["value"] for option in MOOD_OPTIONS]

# Positivity scale used for trend averages. "angry" is not offered in the
# picker but older entries and some classifiers produce it.
MOOD_SCORES: Dict[str, int] = {
    "excited": 5,
    "happy": 4,
    "calm": 3,
    "neutral": 3,
    "sad": 2,
    "stressed": 1,
    "angry": 1,
}

NEUTRAL_SCORE = MOOD_SCORES[NEUTRAL]

# Classifier / LLM labels -> mood labels
EMOTION_LABEL_MAP: Dict[str, str] = {
    "joy": "excited",
    "happiness": "happy",
    "happy": "happy",
    "excitement": "excited",
    "excited": "excited",
    "surprise": "excited",
    "love": "happy",
    "sadness": "sad",
    "sad": "sad",
    "disgust": "sad",
    "fear": "stressed",
    "anger": "stressed",
    "angry": "stressed",
    "anxiety": "stressed",
    "stressed": "stressed",
    "calm": "calm",
    "neutral": "neutral",
}

DIFFICULT_MOODS = {"sad", "stressed", "angry"}


def normalize_mood(mood: Optional[Any]) -> str:
    """Return a scoreable mood label; anything unknown counts as neutral."""
    if not isinstance(mood, str):
        return NEUTRAL
    value = mood.strip().lower()
    return value if value in MOOD_SCORES else NEUTRAL


def map_emotion_label(label: Optional[str]) -> str:
    """Map a classifier label onto the mood enumeration."""
    if not label:
        return NEUTRAL
    cleaned = label.strip().strip(".!\"'").lower()
    return EMOTION_LABEL_MAP.get(cleaned, NEUTRAL)


def get_mood_emoji(mood: str) -> str:
    for option in MOOD_OPTIONS:
        if option["value"] == mood:
            return option["emoji"]
    return "📝"


def mood_score(mood: Optional[Any]) -> int:
    return MOOD_SCORES[normalize_mood(mood)]
