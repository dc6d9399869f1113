"""
Tests for the account directory.
Covers demo seeding, signup uniqueness, lookups and credential checks.
"""

import pytest

from services import AccountDirectory, DuplicateEmailError, StorageTier
from services.account_service import ACCOUNTS_KEY


def create_jane(accounts):
    return accounts.create_account("Jane", "Doe", "jane@example.com", "Secret123", newsletter=True)


def test_first_listing_seeds_demo_account(accounts):
    listed = accounts.list_accounts()

    assert len(listed) == 1
    assert listed[0].email == "demo@recookbook.com"
    assert listed[0].password == "Demo123!"
    assert listed[0].id == 1


def test_seeding_is_idempotent(accounts):
    accounts.list_accounts()
    accounts.list_accounts()

    assert accounts.account_count() == 1


def test_empty_list_is_seeded_again(accounts, storage):
    create_jane(accounts)
    storage.write(StorageTier.DURABLE, ACCOUNTS_KEY, [])

    emails = [a.email for a in accounts.list_accounts()]

    assert emails == ["demo@recookbook.com"]


def test_seeding_can_be_disabled(storage, id_source):
    directory = AccountDirectory(storage, id_source=id_source, seed_demo_account=False)

    assert directory.list_accounts() == []


def test_create_then_find_returns_matching_account(accounts, clock):
    created = create_jane(accounts)
    found = accounts.find_by_email("jane@example.com")

    assert found is not None
    assert found.id == created.id == 1000
    assert (found.first_name, found.last_name, found.password) == ("Jane", "Doe", "Secret123")
    assert found.newsletter is True
    assert found.created_at == created.created_at


def test_new_ids_are_unique(accounts):
    first = create_jane(accounts)
    second = accounts.create_account("John", "Roe", "john@example.com", "Secret123")

    ids = [a.id for a in accounts.list_accounts()]
    assert len(ids) == len(set(ids))
    assert first.id != second.id


def test_duplicate_email_leaves_directory_unchanged(accounts):
    create_jane(accounts)
    before = [a.to_dict() for a in accounts.list_accounts()]

    with pytest.raises(DuplicateEmailError):
        accounts.create_account("Other", "Person", "jane@example.com", "Another123")

    assert [a.to_dict() for a in accounts.list_accounts()] == before


def test_duplicate_of_demo_account_is_rejected(accounts):
    with pytest.raises(DuplicateEmailError):
        accounts.create_account("Demo", "Again", "demo@recookbook.com", "Demo1234")


def test_email_lookup_is_case_sensitive(accounts):
    create_jane(accounts)

    assert accounts.find_by_email("Jane@example.com") is None
    # A differently-cased email is a different account
    accounts.create_account("Jane", "Upper", "Jane@example.com", "Secret123")
    assert accounts.account_count() == 3


def test_verify_credentials(accounts):
    create_jane(accounts)

    assert accounts.verify_credentials("jane@example.com", "Secret123").first_name == "Jane"
    assert accounts.verify_credentials("jane@example.com", "secret123") is None
    assert accounts.verify_credentials("nobody@example.com", "Secret123") is None
    assert accounts.verify_credentials("demo@recookbook.com", "Demo123!") is not None


def test_accounts_stored_in_record_shape(accounts, storage):
    create_jane(accounts)

    records = storage.read(StorageTier.DURABLE, ACCOUNTS_KEY)
    jane = records[-1]
    assert jane['firstName'] == "Jane"
    assert jane['lastName'] == "Doe"
    assert jane['newsletter'] is True
    assert isinstance(jane['createdAt'], str)


def test_corrupt_accounts_value_is_reseeded(accounts, storage):
    storage.durable.set(ACCOUNTS_KEY, "[{broken")

    listed = accounts.list_accounts()

    assert [a.email for a in listed] == ["demo@recookbook.com"]


def test_unreadable_record_still_reserves_its_email(accounts, storage):
    accounts.list_accounts()
    records = storage.read(StorageTier.DURABLE, ACCOUNTS_KEY)
    records.append({'id': 5, 'email': "jane@example.com", 'createdAt': "not-a-date"})
    storage.write(StorageTier.DURABLE, ACCOUNTS_KEY, records)

    assert accounts.find_by_email("jane@example.com") is None
    with pytest.raises(DuplicateEmailError):
        create_jane(accounts)

    emails = [record['email'] for record in storage.read(StorageTier.DURABLE, ACCOUNTS_KEY)]
    assert emails == ["demo@recookbook.com", "jane@example.com"]
