"""
Tests for the durable store inspection tool.
"""

from inspect_store import inspect_store
from services import SQLiteKeyValueBackend, StorageService, StorageTier
from services.account_service import ACCOUNTS_KEY
from services.recipe_service import RECIPES_KEY, SAMPLE_RECIPES, upvotes_key


def test_inspection_skips_unreadable_records(tmp_path, capsys):
    path = str(tmp_path / "recook.db")
    storage = StorageService(SQLiteKeyValueBackend(path))
    storage.write(StorageTier.DURABLE, ACCOUNTS_KEY, [
        {'id': 1, 'firstName': "Jane", 'lastName': "Doe", 'email': "jane@example.com",
         'createdAt': "2024-01-15T00:00:00"},
        {'id': 2, 'email': "broken@example.com", 'createdAt': "not-a-date"}
    ])
    storage.write(StorageTier.DURABLE, RECIPES_KEY, [SAMPLE_RECIPES[0], {'title': "No id"}])
    storage.write(StorageTier.DURABLE, upvotes_key("browser-a"), [1])

    inspect_store(path)

    output = capsys.readouterr().out
    assert "Readable accounts: 1" in output
    assert "jane@example.com" in output
    assert "Readable recipes: 1" in output
    assert "browser-a: [1]" in output
    assert "Store inspection complete" in output


def test_missing_store_is_reported(tmp_path, capsys):
    inspect_store(str(tmp_path / "absent.db"))

    assert "does not exist" in capsys.readouterr().out
