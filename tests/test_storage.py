import json
import os
import threading

import pytest

from moodscape.storage import DuplicateEntryError, EntryStore, StorageError


@pytest.fixture
def store(tmp_path):
    return EntryStore(str(tmp_path / "journal.json"))


def test_missing_file_loads_empty(store):
    data = store.load()
    assert data["entries"] == {}
    assert "created_at" in data["metadata"]
    assert store.list_entries() == []


def test_create_and_get(store):
    entry = store.create({"date": "2024-05-15", "title": "Tuesday", "content": "Went running", "mood": "happy"})

    assert entry["id"]
    assert entry["created_at"] == entry["updated_at"]
    assert store.get(entry["id"]) == entry
    assert store.find_by_date("2024-05-15")["id"] == entry["id"]
    assert store.get("missing") is None


def test_create_ignores_unknown_fields(store):
    entry = store.create({"date": "2024-05-15", "content": "x", "id": "forged", "owner": "someone"})
    assert entry["id"] != "forged"
    assert "owner" not in entry


def test_entries_listed_newest_first(store):
    for day in ("2024-05-13", "2024-05-15", "2024-05-14"):
        store.create({"date": day, "content": day})
    assert [entry["date"] for entry in store.list_entries()] == ["2024-05-15", "2024-05-14", "2024-05-13"]


def test_one_entry_per_date(store):
    store.create({"date": "2024-05-15", "content": "first"})
    with pytest.raises(DuplicateEntryError):
        store.create({"date": "2024-05-15", "content": "second"})
    assert len(store.list_entries()) == 1


def test_partial_update(store):
    entry = store.create({"date": "2024-05-15", "title": "Old", "content": "Body"})
    updated = store.update(entry["id"], {"title": "New"})

    assert updated["title"] == "New"
    assert updated["content"] == "Body"
    assert store.get(entry["id"])["title"] == "New"


def test_update_missing_entry(store):
    assert store.update("missing", {"title": "New"}) is None


def test_update_cannot_move_onto_taken_date(store):
    store.create({"date": "2024-05-14", "content": "a"})
    second = store.create({"date": "2024-05-15", "content": "b"})

    with pytest.raises(DuplicateEntryError):
        store.update(second["id"], {"date": "2024-05-14"})
    assert store.update(second["id"], {"date": "2024-05-15"})["date"] == "2024-05-15"


def test_delete(store):
    entry = store.create({"date": "2024-05-15", "content": "a"})
    assert store.delete(entry["id"]) is True
    assert store.delete(entry["id"]) is False
    assert store.list_entries() == []


def test_search_title_and_content(store):
    store.create({"date": "2024-05-13", "title": "Beach trip", "content": "Sand everywhere"})
    store.create({"date": "2024-05-14", "title": "Office", "content": "Long day at the BEACH office"})
    store.create({"date": "2024-05-15", "title": "Home", "content": "Stayed in"})

    assert [entry["date"] for entry in store.search("beach")] == ["2024-05-14", "2024-05-13"]
    assert store.search("mountain") == []
    assert len(store.search("  ")) == 3


@pytest.mark.parametrize("payload", ["{not json", "[1, 2, 3]", '{"entries": []}'])
def test_corrupt_file_loads_empty(store, payload):
    with open(store.path, "w", encoding="utf-8") as f:
        f.write(payload)
    assert store.load()["entries"] == {}


def test_save_keeps_backup(store):
    store.create({"date": "2024-05-14", "content": "a"})
    store.create({"date": "2024-05-15", "content": "b"})

    assert os.path.exists(f"{store.path}.bak")
    assert not os.path.exists(f"{store.path}.tmp")
    assert not [name for name in os.listdir(os.path.dirname(store.path)) if name.endswith(".tmp")]
    with open(f"{store.path}.bak", encoding="utf-8") as f:
        assert len(json.load(f)["entries"]) == 1


def test_failed_write_raises(tmp_path):
    store = EntryStore(str(tmp_path / "missing-dir" / "journal.json"))
    assert store.save({"entries": {}, "metadata": {}}) is False
    with pytest.raises(StorageError):
        store.create({"date": "2024-05-15", "content": "a"})


def run_in_threads(count, target):
    barrier = threading.Barrier(count)
    results, errors = [], []

    def worker(n):
        barrier.wait()
        try:
            results.append(target(n))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results, errors


def test_concurrent_creates_are_all_saved(tmp_path):
    path = str(tmp_path / "journal.json")
    # a fresh store per call, as each request builds its own
    results, errors = run_in_threads(
        8, lambda n: EntryStore(path).create({"date": f"2024-05-{n + 1:02d}", "content": "x"})
    )

    assert errors == []
    assert len(results) == 8
    assert len(EntryStore(path).list_entries()) == 8


def test_concurrent_creates_for_one_date_keep_one(tmp_path):
    path = str(tmp_path / "journal.json")
    results, errors = run_in_threads(
        8, lambda n: EntryStore(path).create({"date": "2024-05-15", "content": str(n)})
    )

    assert len(results) == 1
    assert len(errors) == 7
    assert all(isinstance(e, DuplicateEntryError) for e in errors)
    assert len(EntryStore(path).list_entries()) == 1
