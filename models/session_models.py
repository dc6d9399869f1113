"""
Session and page-access models for RECOOK BOOK.

A session holds a snapshot of the logged-in account, never a live reference
to the directory record.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .account_models import Account


@dataclass(frozen=True)
class SessionState:
    """Either anonymous or authenticated as a single account"""
    account: Optional[Account] = None

    @classmethod
    def anonymous(cls) -> 'SessionState':
        return cls()

    @classmethod
    def authenticated(cls, account: Account) -> 'SessionState':
        return cls(account=account)

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None


class AccessOutcome(Enum):
    """Result of gating a page request"""
    GRANTED = "granted"
    REDIRECT_REQUIRED = "redirect_required"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    redirect_to: Optional[str] = None

    @classmethod
    def granted(cls) -> 'AccessDecision':
        return cls(AccessOutcome.GRANTED)

    @classmethod
    def redirect(cls, page: str) -> 'AccessDecision':
        return cls(AccessOutcome.REDIRECT_REQUIRED, page)

    @property
    def is_granted(self) -> bool:
        return self.outcome is AccessOutcome.GRANTED
