"""
Entry analysis with a fallback chain of backends.

    analyzer = build_default_analyzer()
    analyzer.detect_mood("I am so stressed about this deadline")

None of the public methods raise: when every backend fails the analyzer
answers with a neutral mood, the opening sentences, or a generic prompt.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from . import config
from .backends import AnalysisBackend, AnalysisUnavailable, GroqBackend, KeywordBackend, LocalModelBackend
from .heuristics import GENERIC_PROMPT, SHORT_TEXT_LENGTH, UNDECIDED_CONFIDENCE, first_sentences
from .moods import NEUTRAL

logger = logging.getLogger(__name__)

ACTIONS = ("summarize", "detect-mood", "reflect", "trend-analysis")


class MoodAnalyzer:

    def __init__(self, backends: Optional[Sequence[AnalysisBackend]] = None):
        self.backends: List[AnalysisBackend] = list(backends or [])
        if not self.backends or not isinstance(self.backends[-1], KeywordBackend):
            self.backends.append(KeywordBackend())

    def _attempt(self, operation: str, argument: Any) -> Tuple[Any, str]:
        for backend in self.backends:
            method: Callable = getattr(backend, operation)
            try:
                return method(argument), backend.name
            except AnalysisUnavailable as e:
                logger.warning(f"{backend.name} {operation} unavailable: {e}")
            except Exception as e:
                logger.error(f"{backend.name} {operation} failed: {e}")
        raise AnalysisUnavailable(f"No backend could {operation}")

    def detect_mood(self, text: str) -> Dict[str, Any]:
        """Dominant mood with confidence (None when the backend gives none)."""
        if text and text.strip():
            try:
                result, _ = self._attempt("detect_mood", text)
                return result
            except AnalysisUnavailable as e:
                logger.error(f"Mood detection failed: {e}")

        return {
            "mood": NEUTRAL,
            "confidence": UNDECIDED_CONFIDENCE,
            "emotions": [],
            "source": "default"
        }

    def _summarize(self, text: str) -> Tuple[str, str]:
        if not text or len(text) < SHORT_TEXT_LENGTH:
            return text, "passthrough"
        try:
            return self._attempt("summarize", text)
        except AnalysisUnavailable as e:
            logger.error(f"Summarization failed: {e}")
            return first_sentences(text), "default"

    def summarize(self, text: str) -> str:
        return self._summarize(text)[0]

    def _reflect(self, text: str) -> Tuple[str, str]:
        if not text or not text.strip():
            return GENERIC_PROMPT, "default"
        try:
            return self._attempt("reflect", text)
        except AnalysisUnavailable as e:
            logger.error(f"Reflection failed: {e}")
            return GENERIC_PROMPT, "default"

    def reflect(self, text: str) -> str:
        return self._reflect(text)[0]

    def _describe_trend(self, entries: List[Dict[str, Any]]) -> Tuple[str, str]:
        try:
            return self._attempt("describe_trend", entries)
        except AnalysisUnavailable as e:
            logger.error(f"Trend analysis failed: {e}")
            return "Start writing more entries to see your patterns!", "default"

    def describe_trend(self, entries: List[Dict[str, Any]]) -> str:
        return self._describe_trend(entries)[0]

    def run(self, action: str, content: str = "", entries: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """Dispatch one of ACTIONS and report which backend answered."""
        if action == "detect-mood":
            mood = self.detect_mood(content)
            return {
                "result": mood["mood"],
                "confidence": mood["confidence"],
                "emotions": mood["emotions"],
                "source": mood["source"]
            }
        if action == "summarize":
            result, source = self._summarize(content)
        elif action == "reflect":
            result, source = self._reflect(content)
        elif action == "trend-analysis":
            result, source = self._describe_trend(entries or [])
        else:
            raise ValueError(f"Unknown action: {action}")
        return {"result": result, "source": source}


def build_default_analyzer() -> MoodAnalyzer:
    """Remote LLM first (when configured), then local models, then keywords."""
    backends: List[AnalysisBackend] = []
    if config.GROQ_API_KEY:
        backends.append(GroqBackend())
    if config.LOCAL_MODELS_ENABLED:
        backends.append(LocalModelBackend())

    names = [backend.name for backend in backends] + [KeywordBackend.name]
    logger.info(f"Analysis chain: {' -> '.join(names)}")
    return MoodAnalyzer(backends)
