"""
Runtime configuration, read once from the environment (and a local .env file).
"""

import os
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        logger.warning(f"Invalid value for {name}, using {default}")
        return default


# Storage
DATA_FILE = os.getenv("MOODSCAPE_DATA_FILE", "journal_data.json")
MAX_ENTRY_LENGTH = 50000  # Characters
MAX_TITLE_LENGTH = 200

# Remote AI (Groq)
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
AI_TIMEOUT = _env_float("MOODSCAPE_AI_TIMEOUT", 15.0)

# Local models (Hugging Face transformers, optional extra)
LOCAL_MODELS_ENABLED = _env_flag("MOODSCAPE_LOCAL_MODELS")
EMOTION_MODEL = os.getenv("MOODSCAPE_EMOTION_MODEL", "j-hartmann/emotion-english-distilroberta-base")
SUMMARY_MODEL = os.getenv("MOODSCAPE_SUMMARY_MODEL", "facebook/bart-large-cnn")

# Server
LOG_LEVEL = os.getenv("MOODSCAPE_LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("MOODSCAPE_PORT", "5000"))
