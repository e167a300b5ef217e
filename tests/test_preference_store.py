import json

import pytest

from logic.preferences import SortPreference
from models.list_query import SortOrder
from services.preference_store import JsonPreferenceStore, preference_store_for


def test_missing_file_has_no_preference(tmp_path):
    store = JsonPreferenceStore(tmp_path / "prefs.json", "customers.sort")

    assert store.load() is None


def test_save_then_load(tmp_path):
    store = preference_store_for(tmp_path, "customers")

    store.save(SortPreference("nama", SortOrder.DESC))

    assert store.load() == SortPreference("nama", SortOrder.DESC)
    document = json.loads((tmp_path / "preferences.json").read_text(encoding="utf-8"))
    assert document == {"customers.sort": {"sort_by": "nama", "sort_order": "desc"}}


def test_pages_share_one_document(tmp_path):
    preference_store_for(tmp_path, "customers").save(SortPreference("nama"))
    preference_store_for(tmp_path, "orders").save(SortPreference("total", SortOrder.DESC))

    assert preference_store_for(tmp_path, "customers").load() == SortPreference("nama", SortOrder.ASC)
    assert preference_store_for(tmp_path, "orders").load().sort_by == "total"
    assert not list(tmp_path.glob("*.tmp.*"))


def test_corrupt_file_loads_as_no_preference(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonPreferenceStore(path, "customers.sort")

    assert store.load() is None

    store.save(SortPreference("ongkir"))
    assert store.load() == SortPreference("ongkir")


def test_malformed_entry_is_ignored(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"customers.sort": {"sort_order": "sideways"}}), encoding="utf-8")

    assert JsonPreferenceStore(path, "customers.sort").load() is None


def test_failed_write_keeps_previous_document(tmp_path, monkeypatch):
    store = preference_store_for(tmp_path, "customers")
    store.save(SortPreference("nama"))
    attempts = []

    def broken_replace(src, dst):
        attempts.append((src, dst))
        raise OSError("disk full")

    monkeypatch.setattr("services.preference_store.os.replace", broken_replace)

    with pytest.raises(OSError):
        store.save(SortPreference("ongkir", SortOrder.DESC))

    assert len(attempts) == 1
    assert store.load() == SortPreference("nama")
    assert not list(tmp_path.glob("*.tmp.*"))
