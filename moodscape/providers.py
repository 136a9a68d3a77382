"""
Lazily initialized, process-wide model handles.
"""

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class ModelUnavailable(RuntimeError):
    """Raised when a model could not be (or previously failed to be) loaded."""


class ModelProvider:
    """
    Loads a model on first use and hands out the same instance afterwards.

    A failed load is remembered so later callers fail fast instead of
    retrying an expensive download on every request. Call `reset()` to
    allow another attempt.
    """

    def __init__(self, name: str, loader: Callable[[], Any]):
        self.name = name
        self._loader = loader
        self._lock = threading.Lock()
        self._instance: Optional[Any] = None
        self._error: Optional[Exception] = None

    @property
    def loaded(self) -> bool:
        return self._instance is not None

    def get_or_init(self) -> Any:
        if self._instance is not None:
            return self._instance

        with self._lock:
            if self._instance is not None:
                return self._instance
            if self._error is not None:
                raise ModelUnavailable(f"{self.name} failed to load: {self._error}")

            logger.info(f"Loading {self.name}...")
            try:
                self._instance = self._loader()
            except Exception as e:
                self._error = e
                logger.error(f"Failed to load {self.name}: {e}")
                raise ModelUnavailable(f"{self.name} failed to load: {e}") from e

            logger.info(f"{self.name} ready")
            return self._instance

    def reset(self) -> None:
        with self._lock:
            self._instance = None
            self._error = None
