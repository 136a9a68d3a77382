"""
JSON-file entry store.

Entries live in a single file keyed by id. Writes go to a unique temp file
first and are swapped in with `os.replace`, keeping a copy of the previous
file as `.bak`. Read-modify-write operations hold a per-file lock.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "date", "title", "content", "mood", "ai_summary", "ai_reflection",
    "sentiment", "themes", "word_count",
)


# One lock per data file, shared by every store that points at it
_path_locks = {}
_registry_lock = threading.Lock()


def _lock_for(path: str):
    with _registry_lock:
        return _path_locks.setdefault(os.path.abspath(path), threading.RLock())


class StorageError(Exception):
    """The entry file could not be written."""


class DuplicateEntryError(StorageError):
    """An entry already exists for that date."""


class EntryStore:

    def __init__(self, path: str):
        self.path = path
        self._lock = _lock_for(path)

    def _empty(self) -> Dict[str, Any]:
        return {"entries": {}, "metadata": {}}

    def load(self) -> Dict[str, Any]:
        """Load journal data from file with error handling."""
        if not os.path.exists(self.path):
            return {"entries": {}, "metadata": {"created_at": datetime.now().isoformat()}}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error in {self.path}: {e}")
            return self._empty()
        except OSError as e:
            logger.error(f"File read error: {e}")
            return self._empty()

        if not isinstance(data, dict) or not isinstance(data.get("entries", {}), dict):
            logger.warning("Invalid data format, resetting")
            return self._empty()

        data.setdefault("entries", {})
        data.setdefault("metadata", {})
        return data

    def save(self, data: Dict[str, Any]) -> bool:
        """Save journal data atomically with backup."""
        backup_file = f"{self.path}.bak"
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_file = None

        with self._lock:
            try:
                fd, tmp_file = tempfile.mkstemp(
                    dir=directory, prefix=f"{os.path.basename(self.path)}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)

                # Copy rather than move so readers never find the file missing
                if os.path.exists(self.path):
                    try:
                        shutil.copy2(self.path, backup_file)
                    except OSError as e:
                        logger.warning(f"Could not keep backup: {e}")

                os.replace(tmp_file, self.path)
                return True

            except OSError as e:
                logger.error(f"Save error: {e}")
                if tmp_file and os.path.exists(tmp_file):
                    try:
                        os.remove(tmp_file)
                    except OSError:
                        logger.warning(f"Could not remove {tmp_file}")
                return False

    def _commit(self, data: Dict[str, Any]) -> None:
        if not self.save(data):
            raise StorageError(f"Failed to write {self.path}")

    # -------------------------------------------------------------------------
    # Entry access
    # -------------------------------------------------------------------------

    def list_entries(self) -> List[Dict[str, Any]]:
        """All entries, newest date first."""
        entries = list(self.load()["entries"].values())
        return sorted(entries, key=lambda entry: str(entry.get("date", "")), reverse=True)

    def get(self, entry_id: str) -> Optional[Dict[str, Any]]:
        return self.load()["entries"].get(entry_id)

    def find_by_date(self, date_key: str) -> Optional[Dict[str, Any]]:
        for entry in self.load()["entries"].values():
            if entry.get("date") == date_key:
                return entry
        return None

    def search(self, query: str) -> List[Dict[str, Any]]:
        """Entries whose title or content contains `query` (case-insensitive)."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.list_entries()
        return [
            entry for entry in self.list_entries()
            if needle in (entry.get("title") or "").lower()
            or needle in (entry.get("content") or "").lower()
        ]

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            data = self.load()
            date_key = fields.get("date")
            if any(entry.get("date") == date_key for entry in data["entries"].values()):
                raise DuplicateEntryError(f"An entry already exists for {date_key}")

            now = datetime.now().isoformat()
            entry = {field: fields[field] for field in UPDATABLE_FIELDS if field in fields}
            entry.update({
                "id": uuid.uuid4().hex,
                "created_at": now,
                "updated_at": now
            })

            data["entries"][entry["id"]] = entry
            self._commit(data)
            return entry

    def update(self, entry_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update. Returns None if the entry does not exist."""
        with self._lock:
            data = self.load()
            entry = data["entries"].get(entry_id)
            if entry is None:
                return None

            new_date = changes.get("date")
            if new_date and new_date != entry.get("date"):
                for other_id, other in data["entries"].items():
                    if other_id != entry_id and other.get("date") == new_date:
                        raise DuplicateEntryError(f"An entry already exists for {new_date}")

            for field in UPDATABLE_FIELDS:
                if field in changes:
                    entry[field] = changes[field]
            entry["updated_at"] = datetime.now().isoformat()

            self._commit(data)
            return entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            data = self.load()
            if entry_id not in data["entries"]:
                return False
            del data["entries"][entry_id]
            self._commit(data)
            return True
