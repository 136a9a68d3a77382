"""
MoodScape - Personal diary API with mood analytics.
"""

import logging
from datetime import date
from functools import wraps
from typing import Any, Dict

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from . import config
from .analyzer import ACTIONS, build_default_analyzer
from .badges import compute_badges, next_milestone
from .heuristics import is_content_meaningful
from .moods import MOOD_OPTIONS, normalize_mood
from .sentiment import analyze_sentiment, empathetic_response, extract_themes
from .storage import DuplicateEntryError, EntryStore, StorageError
from .streaks import encouragement_message, entry_dates, streak_summary, week_chain
from .trends import analyze_trends, build_mood_calendar, mood_stats
from .validation import validate_entry_data

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["DATA_FILE"] = config.DATA_FILE
CORS(app)

if config.GROQ_API_KEY:
    logger.info("Groq API configured for AI features")
else:
    logger.warning("No GROQ_API_KEY found. AI features will use local analysis only")

analyzer = build_default_analyzer()

# Which entry field an analysis result is written back to
RESULT_FIELDS = {
    "detect-mood": "mood",
    "summarize": "ai_summary",
    "reflect": "ai_reflection",
}


def get_store() -> EntryStore:
    return EntryStore(current_app.config["DATA_FILE"])


def handle_errors(f):
    """Decorator for consistent error handling."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except DuplicateEntryError as e:
            return jsonify({"error": str(e)}), 409
        except StorageError as e:
            logger.error(f"Storage error in {f.__name__}: {e}")
            return jsonify({"error": "Failed to save entry"}), 500
        except Exception as e:
            logger.error(f"Error in {f.__name__}: {e}")
            return jsonify({"error": "An unexpected error occurred"}), 500
    return wrapper


def _entry_fields(body: Dict[str, Any]) -> Dict[str, Any]:
    """Copy accepted fields from a request body and derive text metadata."""
    fields = {}
    for key in ("date", "title", "content"):
        if isinstance(body.get(key), str):
            fields[key] = body[key].strip()

    if "mood" in body:
        fields["mood"] = normalize_mood(body["mood"])

    if "content" in fields:
        fields["sentiment"] = analyze_sentiment(fields["content"])
        fields["themes"] = extract_themes(fields["content"])
        fields["word_count"] = len(fields["content"].split())
    return fields


# =============================================================================
# Entry Routes
# =============================================================================

@app.route("/api/moods", methods=["GET"])
def get_moods():
    return jsonify(MOOD_OPTIONS)


@app.route("/api/entries", methods=["GET"])
@handle_errors
def list_entries():
    """All entries, or those matching ?q= in title or content."""
    query = request.args.get("q", "")
    store = get_store()
    entries = store.search(query) if query.strip() else store.list_entries()
    return jsonify(entries)


@app.route("/api/entries", methods=["POST"])
@handle_errors
def create_entry():
    """Create an entry; the mood is suggested from the content when not given."""
    body = request.get_json(silent=True)
    if not body:
        return jsonify({"error": "No data provided"}), 400

    valid, error_msg = validate_entry_data(body)
    if not valid:
        return jsonify({"error": error_msg}), 400

    fields = _entry_fields(body)
    if "mood" not in fields:
        content = fields.get("content", "")
        if is_content_meaningful(content):
            fields["mood"] = analyzer.detect_mood(content)["mood"]
        else:
            fields["mood"] = normalize_mood(None)

    entry = get_store().create(fields)
    return jsonify({
        "saved": True,
        "entry": entry,
        "encouragement": empathetic_response(entry["mood"])
    }), 201


@app.route("/api/entries/<entry_id>", methods=["GET"])
@handle_errors
def get_entry(entry_id: str):
    entry = get_store().get(entry_id)
    if entry:
        return jsonify(entry)
    return jsonify({"error": "Entry not found"}), 404


@app.route("/api/entries/<entry_id>", methods=["PUT", "PATCH"])
@handle_errors
def update_entry(entry_id: str):
    """Partially update an entry."""
    body = request.get_json(silent=True)
    if not body:
        return jsonify({"error": "No data provided"}), 400

    valid, error_msg = validate_entry_data(body, partial=True)
    if not valid:
        return jsonify({"error": error_msg}), 400

    changes = _entry_fields(body)
    for key in ("ai_summary", "ai_reflection"):
        if key not in body:
            continue
        if not isinstance(body[key], str):
            return jsonify({"error": f"{key} must be a string"}), 400
        changes[key] = body[key]

    entry = get_store().update(entry_id, changes)
    if entry is None:
        return jsonify({"error": "Entry not found"}), 404
    return jsonify({"saved": True, "entry": entry})


@app.route("/api/entries/<entry_id>", methods=["DELETE"])
@handle_errors
def delete_entry(entry_id: str):
    if get_store().delete(entry_id):
        return jsonify({"deleted": True})
    return jsonify({"error": "Entry not found"}), 404


# =============================================================================
# AI Routes
# =============================================================================

@app.route("/api/analyze", methods=["POST"])
@handle_errors
def analyze():
    """
    Run one analysis action on a piece of text.

    Body: {"content": str, "action": one of ACTIONS, "entries": [...],
    "entry_id": str}. With `entry_id` the result is also saved onto that
    entry (mood, ai_summary or ai_reflection).
    """
    body = request.get_json(silent=True)
    if not body:
        return jsonify({"error": "No data provided"}), 400

    action = body.get("action")
    if action not in ACTIONS:
        return jsonify({"error": f"Invalid action. Use: {', '.join(ACTIONS)}"}), 400

    store = get_store()
    content = body.get("content", "")
    entries = None

    if action == "trend-analysis":
        entries = body.get("entries")
        if not isinstance(entries, list):
            entries = store.list_entries()
    else:
        if not isinstance(content, str) or not content.strip():
            return jsonify({"error": "No content to analyze"}), 400
        if not is_content_meaningful(content):
            return jsonify({"error": "Please write meaningful content for analysis"}), 400

    response = analyzer.run(action, content, entries)
    response["action"] = action

    entry_id = body.get("entry_id")
    if entry_id and action in RESULT_FIELDS:
        entry = store.update(entry_id, {RESULT_FIELDS[action]: response["result"]})
        if entry is None:
            return jsonify({"error": "Entry not found"}), 404
        response["entry"] = entry

    return jsonify(response)


# =============================================================================
# Analytics Routes
# =============================================================================

@app.route("/api/stats", methods=["GET"])
@handle_errors
def get_stats():
    """Streaks, badges and engagement for the dashboard."""
    entries = get_store().list_entries()
    today = date.today()

    summary = streak_summary(entries, today)
    dates = entry_dates(entries)
    badges = compute_badges(entries, today)

    return jsonify({
        "streak": summary,
        "encouragement": encouragement_message(summary),
        "journaled_today": today in dates,
        "week_chain": week_chain(dates, today),
        "badges": badges,
        "earned_badges": sum(1 for badge in badges if badge["earned"]),
        "next_milestone": next_milestone(summary["current_streak"])
    })


@app.route("/api/trends", methods=["GET"])
@handle_errors
def get_trends():
    entries = get_store().list_entries()
    return jsonify(analyze_trends(entries, date.today()))


@app.route("/api/calendar", methods=["GET"])
@handle_errors
def get_calendar():
    """Mood calendar for the last ?days= days (default 30)."""
    days = request.args.get("days", 30, type=int)
    days = max(1, min(days or 30, 366))

    entries = get_store().list_entries()
    return jsonify({
        "calendar": build_mood_calendar(entries, date.today(), days),
        "mood_stats": mood_stats(entries)
    })


# =============================================================================
# Main
# =============================================================================

def main():
    logger.info("Starting MoodScape server...")
    app.run(debug=True, port=config.PORT)


if __name__ == "__main__":
    main()
