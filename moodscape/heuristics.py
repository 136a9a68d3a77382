"""
Rule-based text analysis used when no model is available.

Everything here is pure and deterministic apart from `reflect_on`, which
picks one of several phrasings at random.
"""

import random
import re
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from .keywords import (
    MOOD_KEYWORDS,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    REFLECTION_THEME_KEYWORDS,
    STOPWORDS,
    THEME_LABELS,
)
from .moods import NEUTRAL

SHORT_TEXT_LENGTH = 50
MIN_SENTENCE_LENGTH = 10
UNDECIDED_CONFIDENCE = 0.5
LONG_ENTRY_WORDS = 150

EMOTIONAL_WORDS = POSITIVE_WORDS | NEGATIVE_WORDS

GENERIC_PROMPT = "Take a moment to reflect on your thoughts and feelings today."

REFLECTION_TEMPLATES = {
    "work": [
        "Work seems to be taking up a lot of space right now. Which part of it felt most within your control today?",
        "You wrote a lot about your job. What would a good outcome look like by the end of this week?",
        "Professional demands run through this entry. What is one thing you handled well that you could build on?",
    ],
    "relationships": [
        "The people around you show up clearly in this entry. Who would you like to reach out to next?",
        "Your connections with others seem important today. What did those moments teach you about what you need?",
        "This entry centers on the people in your life. How did those interactions leave you feeling?",
    ],
    "stress": [
        "It sounds like there is a lot of pressure right now. What is one small thing you could set down for tonight?",
        "Difficult days deserve kindness too. What would you say to a friend who wrote this entry?",
        "You named some real challenges here. Which of them is in your hands, and which can you let go of?",
    ],
    "joy": [
        "There is real brightness in this entry. What made today's good moments possible?",
        "You captured something worth celebrating. How could you make room for more days like this?",
        "This reads like a good day. Which moment would you most like to remember a year from now?",
    ],
    "long": [
        "You covered a lot of ground today. If you had to pick one thread to follow tomorrow, which would it be?",
        "This is a detailed account. Looking back over it, what stands out to you most?",
    ],
    "short": [
        "Thanks for checking in today. What is one thing you would like to remember about it?",
        "Even a few lines count. What would you like tomorrow to feel like?",
    ],
}


def tokenize(text: str) -> List[str]:
    """Lowercase words split on non-word boundaries."""
    if not text:
        return []
    return [token for token in re.split(r"\W+", text.lower()) if token]


def is_content_meaningful(text: str) -> bool:
    """Whether text is worth sending to the analyzer at all."""
    if not text:
        return False
    trimmed = text.strip()
    if len(trimmed) < 10:
        return False

    if len(trimmed.split()) < 3:
        return False

    alpha_count = len(re.findall(r"[a-zA-Z]", trimmed))
    return alpha_count / len(trimmed) >= 0.5


def score_moods(tokens: Iterable[str]) -> Dict[str, int]:
    """Keyword hits per mood, counting every matching token."""
    counts = Counter(tokens)
    return {
        mood: sum(counts[keyword] for keyword in keywords)
        for mood, keywords in MOOD_KEYWORDS.items()
    }


def detect_mood_keywords(text: str) -> Dict[str, Any]:
    """
    Pick the mood whose keywords occur most often in `text`.

    A tie for first place, or no hits at all, resolves to neutral.
    Confidence is the winning hit count normalized by text length
    (hits / max(words / 10, 1)), capped at 1.
    """
    tokens = tokenize(text)
    scores = score_moods(tokens)
    scale = max(len(tokens) / 10, 1)

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    top_mood, top_score = ranked[0]
    tied = len(ranked) > 1 and ranked[1][1] == top_score

    if top_score == 0 or tied:
        mood = NEUTRAL
        confidence = UNDECIDED_CONFIDENCE
    else:
        mood = top_mood
        confidence = min(top_score / scale, 1.0)

    return {
        "mood": mood,
        "confidence": round(confidence, 3),
        "emotions": [
            {"emotion": name, "score": round(min(score / scale, 1.0), 3)}
            for name, score in ranked
        ],
        "source": "keywords"
    }


def extract_keywords(text: str, limit: int = 8) -> List[str]:
    """Most frequent non-stopword tokens longer than 3 characters."""
    tokens = [
        token for token in tokenize(text)
        if len(token) > 3 and token not in STOPWORDS and not token.isdigit()
    ]
    return [word for word, _ in Counter(tokens).most_common(limit)]


def split_sentences(text: str) -> List[str]:
    """Sentences split on terminal punctuation, dropping short fragments."""
    if not text:
        return []
    parts = (part.strip() for part in re.split(r"[.!?]+", text))
    return [part for part in parts if len(part) >= MIN_SENTENCE_LENGTH]


def first_sentences(text: str, count: int = 2) -> str:
    sentences = split_sentences(text)
    if not sentences:
        trimmed = (text or "").strip()
        if len(trimmed) < SHORT_TEXT_LENGTH:
            return trimmed
        # Only short fragments, keep the first few of them
        sentences = [part.strip() for part in re.split(r"[.!?]+", trimmed) if part.strip()]
    return ". ".join(sentences[:count]) + "."


def detect_reflection_theme(tokens: Iterable[str]) -> Optional[str]:
    """First life-domain theme (in priority order) with a keyword present."""
    token_set = set(tokens)
    for theme, keywords in REFLECTION_THEME_KEYWORDS.items():
        if token_set & keywords:
            return theme
    return None


def _score_sentence(index: int, last_index: int, sentence: str, keywords: set) -> float:
    tokens = set(tokenize(sentence))
    score = 0.0
    if index == 0:
        score += 2.0
    elif index == last_index:
        score += 1.0
    score += len(tokens & keywords)
    if tokens & EMOTIONAL_WORDS:
        score += 1.0
    return score


def summarize_extractive(text: str, max_sentences: int = 2, with_theme: bool = True) -> str:
    """
    Summarize by picking the most salient sentences.

    Sentences earn points for leading or closing the entry, for each of the
    entry's top keywords they contain, and for containing an emotional word.
    The winners are returned in their original order.
    """
    if not text or len(text) < SHORT_TEXT_LENGTH:
        return text

    sentences = split_sentences(text)
    if len(sentences) <= max_sentences:
        return first_sentences(text, max_sentences)

    keywords = set(extract_keywords(text))
    last_index = len(sentences) - 1
    scored = [
        (_score_sentence(i, last_index, sentence, keywords), i)
        for i, sentence in enumerate(sentences)
    ]

    best = sorted(scored, key=lambda item: (-item[0], item[1]))[:max_sentences]
    chosen = [sentences[i] for _, i in sorted(best, key=lambda item: item[1])]
    summary = ". ".join(chosen) + "."

    if with_theme:
        theme = detect_reflection_theme(tokenize(text))
        if theme:
            summary += f" Main theme: {THEME_LABELS[theme]}."

    return summary


def reflect_on(text: str, rng: Optional[random.Random] = None) -> str:
    """Pick a reflection prompt matching the entry's dominant life theme."""
    if not text or not text.strip():
        return GENERIC_PROMPT

    chooser = rng or random
    theme = detect_reflection_theme(tokenize(text))
    if theme is None:
        theme = "long" if len(text.split()) > LONG_ENTRY_WORDS else "short"

    return chooser.choice(REFLECTION_TEMPLATES[theme])
