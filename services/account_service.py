"""
Account directory for RECOOK BOOK.

Owns the account list in the durable tier: lookup, signup, and credential
checks. Emails are matched exactly as stored. Passwords are compared in
clear text, which is a known and accepted insecurity of this site.

Stored records that cannot be read are hidden from lookups but are never
dropped from storage, and their emails stay reserved.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from models import Account
from utils import get_logger, log_event, log_operation, ClockIdSource, system_now
from .errors import DuplicateEmailError
from .storage_service import StorageService, StorageTier

logger = get_logger(__name__)

ACCOUNTS_KEY = "accounts"

DEMO_ACCOUNT = {
    'id': 1,
    'firstName': 'Demo',
    'lastName': 'User',
    'email': 'demo@recookbook.com',
    'password': 'Demo123!',
    'newsletter': True
}


class AccountDirectory:
    """
    Account lookup and creation against the durable tier.
    Seeds a demo account whenever the stored list is empty.
    """

    def __init__(self, storage: StorageService,
                 id_source: Optional[Callable[[], int]] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 seed_demo_account: bool = True):
        self.storage = storage
        self.id_source = id_source or ClockIdSource()
        self.clock = clock or system_now
        self.seed_demo_account = seed_demo_account

    def list_accounts(self) -> List[Account]:
        """All readable accounts in signup order"""
        with self.storage.mutation(ACCOUNTS_KEY):
            records = self._load_or_seed()
        return self._to_accounts(records)

    def find_by_email(self, email: str) -> Optional[Account]:
        """Exact, case-sensitive email lookup"""
        for account in self.list_accounts():
            if account.email == email:
                return account
        return None

    def create_account(self, first_name: str, last_name: str, email: str,
                       password: str, newsletter: bool = False) -> Account:
        """
        Create and persist a new account.

        Raises:
            DuplicateEmailError: an account with this email already exists
        """
        with self.storage.mutation(ACCOUNTS_KEY):
            records = self._load_or_seed()
            # Checked against raw records so unreadable ones still reserve their email
            if any(isinstance(record, dict) and record.get('email') == email for record in records):
                log_event(logger, "account.duplicate", logging.WARNING, email=email)
                raise DuplicateEmailError(email)

            account = Account(
                id=self.id_source(),
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                newsletter=newsletter,
                created_at=self.clock()
            )
            records.append(account.to_dict())
            self.storage.write(StorageTier.DURABLE, ACCOUNTS_KEY, records)

        log_event(logger, "account.created", account_id=account.id, email=email, total=len(records))
        return account

    def verify_credentials(self, email: str, password: str) -> Optional[Account]:
        """Return the account matching both email and password, if any"""
        account = self.find_by_email(email)
        if account is not None and account.password == password:
            return account
        return None

    def account_count(self) -> int:
        return len(self.list_accounts())

    def _load_or_seed(self) -> list:
        records = self._load_records()
        if not records and self.seed_demo_account:
            records = self._seed_demo_account()
        return records

    def _load_records(self) -> list:
        records = self.storage.read(StorageTier.DURABLE, ACCOUNTS_KEY, default=[])
        if not isinstance(records, list):
            log_event(logger, "account.list_malformed", logging.WARNING, stored_type=type(records).__name__)
            return []
        return records

    def _seed_demo_account(self) -> list:
        with log_operation(logger, "account.seed_demo", email=DEMO_ACCOUNT['email']):
            record = dict(DEMO_ACCOUNT, createdAt=self.clock().isoformat())
            records = [record]
            self.storage.write(StorageTier.DURABLE, ACCOUNTS_KEY, records)
        return records

    def _to_accounts(self, records: list) -> List[Account]:
        accounts = []
        for record in records:
            try:
                accounts.append(Account.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                log_event(logger, "account.unreadable", logging.WARNING, error=str(e))
        return accounts
