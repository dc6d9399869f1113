"""
Tests for the two-tier persistent store.
Covers JSON fidelity, tier isolation, corrupt data handling and the
Streamlit session backend.
"""

import logging

from services import (
    StorageService, StorageTier, SQLiteKeyValueBackend, MemorySessionBackend, StreamlitSessionBackend
)


def test_round_trip_preserves_record_shapes(storage):
    records = [
        {'id': 1, 'email': 'a@b.co', 'newsletter': True, 'createdAt': '2024-01-15T00:00:00'},
        {'id': 2, 'email': 'c@d.co', 'newsletter': False, 'createdAt': '2024-02-01T09:30:00'}
    ]
    storage.write(StorageTier.DURABLE, "accounts", records)

    assert storage.read(StorageTier.DURABLE, "accounts") == records


def test_tiers_are_isolated(storage):
    storage.write(StorageTier.DURABLE, "shared", [1, 2, 3])

    assert storage.read(StorageTier.SESSION, "shared") is None
    assert storage.read(StorageTier.DURABLE, "shared") == [1, 2, 3]


def test_absent_key_returns_default(storage):
    assert storage.read(StorageTier.DURABLE, "missing") is None
    assert storage.read(StorageTier.DURABLE, "missing", default=[]) == []


def test_corrupt_value_is_treated_as_absent(storage, caplog):
    storage.durable.set("recipes", "{not valid json")

    with caplog.at_level(logging.WARNING):
        value = storage.read(StorageTier.DURABLE, "recipes", default=[])

    assert value == []
    assert "store.corrupt_value" in caplog.text
    assert "key='recipes'" in caplog.text


def test_write_many_and_remove(storage):
    storage.write_many(StorageTier.DURABLE, {"recipes": [], "upvotedRecipeIds": [4, 5]})
    assert storage.keys(StorageTier.DURABLE) == ["recipes", "upvotedRecipeIds"]

    storage.remove(StorageTier.DURABLE, "recipes")
    assert storage.keys(StorageTier.DURABLE) == ["upvotedRecipeIds"]

    # Removing twice is harmless
    storage.remove(StorageTier.DURABLE, "recipes")


def test_clear_only_touches_one_tier(storage):
    storage.write(StorageTier.DURABLE, "accounts", [])
    storage.write(StorageTier.SESSION, "currentUser", {'id': 1})

    storage.clear(StorageTier.SESSION)

    assert storage.read(StorageTier.SESSION, "currentUser") is None
    assert storage.read(StorageTier.DURABLE, "accounts") == []


def test_durable_file_survives_new_backend(tmp_path):
    path = str(tmp_path / "store" / "recook.db")
    first = StorageService(SQLiteKeyValueBackend(path), MemorySessionBackend())
    first.write(StorageTier.DURABLE, "upvotedRecipeIds", [7])
    first.write(StorageTier.SESSION, "currentUser", {'id': 1})

    second = StorageService(SQLiteKeyValueBackend(path), MemorySessionBackend())

    assert second.read(StorageTier.DURABLE, "upvotedRecipeIds") == [7]
    assert second.read(StorageTier.SESSION, "currentUser") is None


def test_overwrite_replaces_value(storage):
    storage.write(StorageTier.DURABLE, "recipes", [{'id': 1}])
    storage.write(StorageTier.DURABLE, "recipes", [{'id': 2}])

    assert storage.read(StorageTier.DURABLE, "recipes") == [{'id': 2}]


def test_streamlit_backend_namespaces_keys():
    state = {"search_box": "rice"}
    backend = StreamlitSessionBackend(state)
    storage = StorageService(SQLiteKeyValueBackend(":memory:"), backend)

    storage.write(StorageTier.SESSION, "pendingReturnTarget", "recipes.html")

    assert state["recook_book:pendingReturnTarget"] == '"recipes.html"'
    assert storage.keys(StorageTier.SESSION) == ["pendingReturnTarget"]

    storage.clear(StorageTier.SESSION)

    assert state == {"search_box": "rice"}


def test_mutation_scope_is_reentrant(storage):
    with storage.mutation("recipes"):
        with storage.mutation("recipes", "upvotedRecipeIds"):
            storage.write(StorageTier.DURABLE, "recipes", [])

    assert storage.read(StorageTier.DURABLE, "recipes") == []
