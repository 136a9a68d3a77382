"""
Analysis backends, tried in order by `MoodAnalyzer`.

Each backend implements the same four operations. A backend that cannot
serve a request raises `AnalysisUnavailable` and the analyzer moves on to
the next one; the keyword backend at the end of the chain always answers.
"""

import json
import logging
import random
from typing import Any, Dict, List, Optional

from . import config
from .heuristics import detect_mood_keywords, reflect_on, summarize_extractive, tokenize
from .moods import EMOTION_LABEL_MAP, map_emotion_label
from .providers import ModelProvider, ModelUnavailable
from .trends import describe_recent_trend

logger = logging.getLogger(__name__)


class AnalysisUnavailable(Exception):
    """A backend could not produce a result for this request."""


class AnalysisBackend:
    name = "base"

    def detect_mood(self, text: str) -> Dict[str, Any]:
        raise AnalysisUnavailable(f"{self.name} cannot detect mood")

    def summarize(self, text: str) -> str:
        raise AnalysisUnavailable(f"{self.name} cannot summarize")

    def reflect(self, text: str) -> str:
        raise AnalysisUnavailable(f"{self.name} cannot reflect")

    def describe_trend(self, entries: List[Dict[str, Any]]) -> str:
        raise AnalysisUnavailable(f"{self.name} cannot analyze trends")


# =============================================================================
# Remote LLM (Groq)
# =============================================================================

SUMMARY_PROMPT = """You create concise, meaningful summaries of diary entries.
Keep it under 100 words and capture the main emotions and events.
Output only the summary, nothing else."""

MOOD_PROMPT = """You are an emotion detection assistant. Analyze the diary entry and return only
one of these exact mood values: happy, sad, excited, calm, stressed, neutral.
Return only the mood word, nothing else."""

REFLECTION_PROMPT = """You are a supportive journaling companion. Offer a brief, encouraging reflection
or a gentle question based on the diary entry. Keep it under 80 words.
Write in second person and avoid generic advice."""

TREND_PROMPT = """You are a mood trend analyst. Look at the recent diary entries and describe
the mood patterns you notice, with one encouraging observation.
Keep it under 150 words."""


class GroqBackend(AnalysisBackend):
    """Chat-completion backed analysis through the Groq API."""

    name = "groq"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[float] = None, client: Any = None):
        self.api_key = api_key or config.GROQ_API_KEY
        self.model = model or config.GROQ_MODEL
        self.timeout = timeout if timeout is not None else config.AI_TIMEOUT
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise AnalysisUnavailable("GROQ_API_KEY is not configured")
            from groq import Groq
            self._client = Groq(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def _complete(self, system_prompt: str, user_prompt: str,
                  max_tokens: int = 200, temperature: float = 0.7) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise AnalysisUnavailable(f"Groq request failed: {e}") from e

        if not content or not content.strip():
            raise AnalysisUnavailable("Groq returned an empty response")
        return content.strip()

    def detect_mood(self, text: str) -> Dict[str, Any]:
        reply = self._complete(MOOD_PROMPT, f'Diary entry: "{text}"', max_tokens=10, temperature=0.1)
        # Models sometimes wrap the label, e.g. "Mood: stressed"
        label = next((word for word in tokenize(reply) if word in EMOTION_LABEL_MAP), None)
        if label is None:
            raise AnalysisUnavailable(f"Unrecognised mood reply: {reply!r}")
        mood = map_emotion_label(label)
        return {"mood": mood, "confidence": None, "emotions": [], "source": self.name}

    def summarize(self, text: str) -> str:
        return self._complete(SUMMARY_PROMPT, f'Please summarize this diary entry: "{text}"')

    def reflect(self, text: str) -> str:
        return self._complete(REFLECTION_PROMPT, f'Diary entry: "{text}"', max_tokens=150)

    def describe_trend(self, entries: List[Dict[str, Any]]) -> str:
        if not entries:
            raise AnalysisUnavailable("No entries to analyze")
        recent = sorted(entries, key=lambda entry: str(entry.get("date", "")))[-14:]
        compact = [
            {
                "date": entry.get("date"),
                "mood": entry.get("mood"),
                "content": (entry.get("content") or "")[:200]
            }
            for entry in recent
        ]
        return self._complete(TREND_PROMPT, f"Recent diary entries: {json.dumps(compact)}", max_tokens=250)


# =============================================================================
# Local transformers pipelines
# =============================================================================

def _load_emotion_classifier():
    from transformers import pipeline
    return pipeline("text-classification", model=config.EMOTION_MODEL, top_k=None)


def _load_summarizer():
    from transformers import pipeline
    return pipeline("summarization", model=config.SUMMARY_MODEL)


emotion_provider = ModelProvider("emotion classifier", _load_emotion_classifier)
summarizer_provider = ModelProvider("summarization model", _load_summarizer)


class LocalModelBackend(AnalysisBackend):
    """In-process Hugging Face models, loaded on first use."""

    name = "local"

    def __init__(self, emotion: Optional[ModelProvider] = None, summarizer: Optional[ModelProvider] = None):
        self.emotion = emotion or emotion_provider
        self.summarizer = summarizer or summarizer_provider

    def _model(self, provider: ModelProvider):
        try:
            return provider.get_or_init()
        except ModelUnavailable as e:
            raise AnalysisUnavailable(str(e)) from e

    def detect_mood(self, text: str) -> Dict[str, Any]:
        classifier = self._model(self.emotion)
        try:
            result = classifier(text, truncation=True)
        except Exception as e:
            raise AnalysisUnavailable(f"Emotion classification failed: {e}") from e

        # A single input may come back wrapped in an outer list
        if result and isinstance(result[0], list):
            result = result[0]
        if not result:
            raise AnalysisUnavailable("Emotion classifier returned no labels")

        ranked = sorted(result, key=lambda item: item["score"], reverse=True)
        top = ranked[0]
        return {
            "mood": map_emotion_label(top["label"]),
            "confidence": round(float(top["score"]), 3),
            "emotions": [
                {"emotion": map_emotion_label(item["label"]), "score": round(float(item["score"]), 3)}
                for item in ranked
            ],
            "source": self.name
        }

    def summarize(self, text: str) -> str:
        summarizer = self._model(self.summarizer)
        try:
            result = summarizer(text, max_length=100, min_length=30, do_sample=False, truncation=True)
            summary = result[0]["summary_text"].strip()
        except Exception as e:
            raise AnalysisUnavailable(f"Summarization failed: {e}") from e
        if not summary:
            raise AnalysisUnavailable("Summarization model returned nothing")
        return summary


# =============================================================================
# Keyword heuristics
# =============================================================================

class KeywordBackend(AnalysisBackend):
    """Rule-based analysis that needs no model and never fails."""

    name = "keywords"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    def detect_mood(self, text: str) -> Dict[str, Any]:
        return detect_mood_keywords(text)

    def summarize(self, text: str) -> str:
        return summarize_extractive(text)

    def reflect(self, text: str) -> str:
        return reflect_on(text, self.rng)

    def describe_trend(self, entries: List[Dict[str, Any]]) -> str:
        return describe_recent_trend(entries)
