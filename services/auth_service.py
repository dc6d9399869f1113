"""
Session authentication for RECOOK BOOK.

Handles login/logout against the session tier and gates page access.
A session holds a copy of the account taken at login. Nothing is cached on
the authenticator itself: state is re-read from the session tier on every
call, since each page load starts from a fresh script run.
"""

import logging
from typing import Optional

from models import Account, SessionState, AccessDecision
from utils import get_logger, log_event
from .account_service import AccountDirectory
from .errors import InvalidCredentialsError
from .storage_service import StorageService, StorageTier

logger = get_logger(__name__)

CURRENT_USER_KEY = "currentUser"
RETURN_TARGET_KEY = "pendingReturnTarget"

LOGIN_PAGE = "login.html"
SIGNUP_PAGE = "signup.html"
SPLASH_PAGE = "splash.html"
HOME_PAGE = "index.html"

PUBLIC_PAGES = (LOGIN_PAGE, SIGNUP_PAGE, SPLASH_PAGE)
PRE_AUTH_PAGES = (LOGIN_PAGE, SIGNUP_PAGE)


class SessionAuthenticator:
    """
    Single-session authenticator.
    States are Anonymous and Authenticated(account).
    """

    def __init__(self, storage: StorageService, accounts: AccountDirectory,
                 public_pages=PUBLIC_PAGES):
        self.storage = storage
        self.accounts = accounts
        self.public_pages = tuple(public_pages)

    # Session transitions

    def login(self, email: str, password: str) -> Account:
        """
        Authenticate and store the account snapshot in the session tier.

        Raises:
            InvalidCredentialsError: no account matches email and password
        """
        account = self.accounts.verify_credentials(email, password)
        if account is None:
            log_event(logger, "session.login_failed", logging.WARNING, email=email)
            raise InvalidCredentialsError()

        self.storage.write(StorageTier.SESSION, CURRENT_USER_KEY, account.to_dict())
        log_event(logger, "session.login", account_id=account.id, email=email)
        return account

    def logout(self):
        """Clear the session and return to Anonymous"""
        session = self.current_session()
        self.storage.remove(StorageTier.SESSION, CURRENT_USER_KEY)
        if session.is_authenticated:
            log_event(logger, "session.logout", account_id=session.account.id)

    def current_session(self) -> SessionState:
        """Derive the session state from the session tier"""
        record = self.storage.read(StorageTier.SESSION, CURRENT_USER_KEY)
        if not record:
            return SessionState.anonymous()
        try:
            return SessionState.authenticated(Account.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            log_event(logger, "session.unreadable", logging.WARNING, error=str(e))
            self.storage.remove(StorageTier.SESSION, CURRENT_USER_KEY)
            return SessionState.anonymous()

    def purge_legacy_durable_session(self) -> bool:
        """Remove a login left in the durable tier so it cannot outlive the session"""
        if self.storage.read(StorageTier.DURABLE, CURRENT_USER_KEY) is None:
            return False
        self.storage.remove(StorageTier.DURABLE, CURRENT_USER_KEY)
        log_event(logger, "session.durable_login_purged")
        return True

    # Page access gating

    def is_public_page(self, page: str) -> bool:
        return page in self.public_pages

    def check_page_access(self, page: str) -> AccessDecision:
        """
        Resolve access to `page` for the current session.

        Anonymous requests for restricted pages remember `page` as the
        pending-return target, replacing any earlier one.
        """
        session = self.current_session()

        if not session.is_authenticated and not self.is_public_page(page):
            self.storage.write(StorageTier.SESSION, RETURN_TARGET_KEY, page)
            log_event(logger, "access.denied", page=page, redirect_to=LOGIN_PAGE)
            return AccessDecision.redirect(LOGIN_PAGE)

        if session.is_authenticated and page in PRE_AUTH_PAGES:
            log_event(logger, "access.redirect_home", logging.DEBUG, page=page)
            return AccessDecision.redirect(HOME_PAGE)

        return AccessDecision.granted()

    def pending_return_target(self) -> Optional[str]:
        return self.storage.read(StorageTier.SESSION, RETURN_TARGET_KEY)

    def consume_return_target(self, default: str = SPLASH_PAGE) -> str:
        """Pop the pending-return target, falling back to the default landing page"""
        target = self.pending_return_target()
        if target is None:
            return default
        self.storage.remove(StorageTier.SESSION, RETURN_TARGET_KEY)
        return target
