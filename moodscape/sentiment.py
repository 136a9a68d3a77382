"""
VADER polarity scoring and topic tags stored alongside each entry.
"""

import logging
from typing import Any, Dict, List

from .keywords import ENTRY_THEME_KEYWORDS
from .providers import ModelProvider, ModelUnavailable

logger = logging.getLogger(__name__)


def _load_vader():
    import nltk
    from nltk.sentiment.vader import SentimentIntensityAnalyzer

    # Download NLTK data (only once)
    try:
        nltk.data.find("sentiment/vader_lexicon.zip")
    except LookupError:
        logger.info("Downloading NLTK VADER lexicon...")
        nltk.download("vader_lexicon", quiet=True)

    return SentimentIntensityAnalyzer()


vader_provider = ModelProvider("VADER sentiment analyzer", _load_vader)


def _neutral_sentiment() -> Dict[str, Any]:
    return {"compound": 0.0, "label": "neutral", "scores": {}}


def analyze_sentiment(text: str) -> Dict[str, Any]:
    """
    Analyze sentiment of text using VADER.
    Returns compound score (-1 to 1) and a polarity label.
    """
    if not text or not text.strip():
        return _neutral_sentiment()

    try:
        sia = vader_provider.get_or_init()
    except ModelUnavailable as e:
        logger.warning(f"Sentiment scoring skipped: {e}")
        return _neutral_sentiment()

    scores = sia.polarity_scores(text)
    compound = scores["compound"]

    if compound >= 0.5:
        label = "very_positive"
    elif compound >= 0.2:
        label = "positive"
    elif compound > -0.2:
        label = "neutral"
    elif compound > -0.5:
        label = "negative"
    else:
        label = "very_negative"

    return {
        "compound": round(compound, 3),
        "label": label,
        "scores": {
            "positive": round(scores["pos"], 3),
            "negative": round(scores["neg"], 3),
            "neutral": round(scores["neu"], 3)
        }
    }


def extract_themes(text: str) -> List[str]:
    """Extract key themes/topics from text."""
    if not text:
        return []

    text_lower = text.lower()
    found_themes = []

    for theme, keywords in ENTRY_THEME_KEYWORDS.items():
        if any(kw in text_lower for kw in keywords):
            found_themes.append(theme)

    return found_themes[:5]


def empathetic_response(mood: str) -> str:
    """Short acknowledgement shown after an entry is saved."""
    responses = {
        "excited": "That energy comes through in every line. Enjoy it!",
        "happy": "It sounds like things are going well. Keep nurturing those good moments.",
        "calm": "A calm day is worth writing down too. Thanks for taking the time.",
        "neutral": "Thank you for reflecting today. Every entry helps you understand yourself better.",
        "stressed": "It seems like today had a lot of pressure. Remember to give yourself a break.",
        "sad": "I hear that today was tough. Writing about it is a brave step. Be gentle with yourself.",
        "angry": "Getting frustration onto the page is a healthy first step. Take a breath."
    }
    return responses.get(mood, "Thank you for journaling today.")
