#!/usr/bin/env python3
"""
Durable store inspection tool for RECOOK BOOK.
Shows the accounts, recipes and per-browser upvote records kept in the
durable tier. Unreadable records are skipped with a warning, as the site does.
"""

import argparse
import os
from pathlib import Path
from dotenv import load_dotenv

from services import StorageService, StorageTier, SQLiteKeyValueBackend, AccountDirectory, RecipeCatalog
from services.recipe_service import UPVOTES_KEY

load_dotenv()


def inspect_store(storage_path: str, clear: bool = False):
    """Print the durable tier contents"""

    print(f"[INSPECT] Inspecting store: {storage_path}")

    if not os.path.exists(storage_path):
        print(f"[ERROR] Store file does not exist: {storage_path}")
        return

    print(f"[FILE] Store file size: {os.path.getsize(storage_path)} bytes")

    storage = StorageService(SQLiteKeyValueBackend(storage_path))

    if clear:
        storage.clear(StorageTier.DURABLE)
        print("[CLEARED] All durable data removed")
        return

    keys = storage.keys(StorageTier.DURABLE)
    print(f"\n[KEYS] {', '.join(keys) or '(none)'}")

    accounts = AccountDirectory(storage, seed_demo_account=False).list_accounts()
    print(f"\n[ACCOUNTS] Readable accounts: {len(accounts)}")
    for index, account in enumerate(accounts, start=1):
        print(f"   {index}. {account.get_display_name()} ({account.email}) - "
              f"Created: {account.created_at.strftime('%Y-%m-%d')}")

    recipes = RecipeCatalog(storage).list()
    print(f"\n[RECIPES] Readable recipes: {len(recipes)}")
    for recipe in recipes:
        print(f"   ID: {recipe.id}, Title: '{recipe.title}', Category: '{recipe.category}', "
              f"Upvotes: {recipe.upvotes}")

    prefix = f"{UPVOTES_KEY}:"
    identities = [key[len(prefix):] for key in keys if key.startswith(prefix)]
    print(f"\n[UPVOTES] Browser identities with upvotes: {len(identities)}")
    for identity in identities:
        upvoted = RecipeCatalog(storage, identity=identity).upvoted_ids()
        print(f"   {identity}: {upvoted}")

    print("\n[SUCCESS] Store inspection complete!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inspect the RECOOK BOOK durable store")
    parser.add_argument("--path", default=os.getenv('RECOOK_STORAGE_PATH', 'recook_book.db'))
    parser.add_argument("--clear", action="store_true", help="remove all durable data")
    args = parser.parse_args()

    inspect_store(str(Path(args.path).resolve()), clear=args.clear)
