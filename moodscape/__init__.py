"""MoodScape: diary entries with streaks, mood trends and AI-assisted reflection."""

__version__ = "1.0.0"
