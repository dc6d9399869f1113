"""
Site controller for RECOOK BOOK.

Turns renderer events (signup, login, logout, submit, delete, upvote,
filter) into direct calls on the core services. Every mutation re-renders
all dependent views before returning, so the renderer never shows a listing
that disagrees with storage.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from models import Account, Recipe, SessionState, AccessDecision, SortMode
from utils import Config, get_config, get_logger, log_event
from .account_service import AccountDirectory
from .auth_service import SessionAuthenticator, LOGIN_PAGE
from .errors import DuplicateEmailError, InvalidCredentialsError, ValidationError
from .recipe_service import RecipeCatalog, DEFAULT_IDENTITY, resolve_sort_mode
from .validation_service import validate_signup_form, validate_login_form, validate_recipe_form

logger = get_logger(__name__)

ALL_RECIPES_VIEW = "all-recipes"
FEATURED_VIEW = "featured-recipes"


class MessageSeverity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Renderer:
    """
    Presentation collaborator. The default implementation draws nothing;
    front ends override the methods they support.
    """

    def render(self, view: str, recipes: List[Recipe], upvoted_ids: Iterable[int]):
        pass

    def render_auth_state(self, session: SessionState):
        pass

    def show_message(self, text: str, severity: MessageSeverity = MessageSeverity.INFO,
                     field: Optional[str] = None):
        pass


class SiteController:
    """
    Event entry points for the presentation layer.

    One controller is built per page load. The search/category/sort filter
    applied to the all-recipes view is remembered for the controller's life.
    """

    def __init__(self, accounts: AccountDirectory, authenticator: SessionAuthenticator,
                 catalog: RecipeCatalog, renderer: Optional[Renderer] = None,
                 config: Optional[Config] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.accounts = accounts
        self.auth = authenticator
        self.catalog = catalog
        self.renderer = renderer or Renderer()
        self.config = config or get_config()
        self.sleep = sleep
        self.current_filter: Tuple[str, str, SortMode] = ("", "", SortMode.NEWEST)

    # Page load

    def page_load(self, page: str) -> AccessDecision:
        """Gate the page, then render it if access is granted"""
        self.auth.purge_legacy_durable_session()
        decision = self.auth.check_page_access(page)

        if not decision.is_granted:
            if decision.redirect_to == LOGIN_PAGE:
                self.renderer.show_message("Please login to access RECOOK BOOK", MessageSeverity.INFO)
            else:
                self.renderer.show_message("Welcome back! Redirecting to home page...", MessageSeverity.INFO)
            self._pause(self.config.redirect_delay_seconds)
            return decision

        self.refresh_views()
        return decision

    def refresh_views(self):
        """Recompute navigation state and every recipe view from storage"""
        self.renderer.render_auth_state(self.auth.current_session())
        upvoted = self.catalog.upvoted_ids()
        self.renderer.render(ALL_RECIPES_VIEW, self.catalog.filter(*self.current_filter), upvoted)
        self.renderer.render(FEATURED_VIEW, self.catalog.featured(self.config.featured_count), upvoted)

    # Account events

    def submit_signup(self, fields: Dict[str, Any]) -> Optional[Account]:
        try:
            cleaned = validate_signup_form(fields, self.config.password_min_length)
        except ValidationError as e:
            self._show_field_errors(e)
            return None

        self._pause(self.config.loading_delay_seconds)

        try:
            account = self.accounts.create_account(**cleaned)
        except DuplicateEmailError:
            self.renderer.show_message(
                "An account with this email already exists", MessageSeverity.ERROR, field='email'
            )
            return None

        self.renderer.show_message("Account created successfully! Please log in.", MessageSeverity.SUCCESS)
        self.refresh_views()
        return account

    def submit_login(self, email: str, password: str) -> Optional[str]:
        """
        Log in and return the page to go to next.

        Returns:
            The pending-return target if one was recorded, else the splash
            page; None if login failed
        """
        try:
            validate_login_form(email, password)
        except ValidationError as e:
            self._show_field_errors(e)
            return None

        self._pause(self.config.loading_delay_seconds)

        try:
            account = self.auth.login(email.strip(), password)
        except InvalidCredentialsError as e:
            self.renderer.show_message(str(e), MessageSeverity.ERROR, field='password')
            return None

        self.renderer.show_message(f"Welcome back, {account.first_name}!", MessageSeverity.SUCCESS)
        self.refresh_views()
        self._pause(self.config.redirect_delay_seconds)
        return self.auth.consume_return_target()

    def request_logout(self) -> str:
        self.auth.logout()
        self.renderer.show_message("Logged out successfully. Redirecting to login...", MessageSeverity.INFO)
        self.refresh_views()
        self._pause(self.config.redirect_delay_seconds)
        return LOGIN_PAGE

    # Recipe events

    def submit_recipe(self, fields: Dict[str, Any]) -> Optional[Recipe]:
        try:
            cleaned = validate_recipe_form(fields)
        except ValidationError as e:
            self._show_field_errors(e)
            return None

        recipe = self.catalog.add(cleaned)
        self.renderer.show_message("Recipe shared successfully!", MessageSeverity.SUCCESS)
        self.refresh_views()
        return recipe

    def request_delete(self, recipe_id: int) -> bool:
        removed = self.catalog.delete(recipe_id)
        if removed:
            self.renderer.show_message("Recipe deleted successfully!", MessageSeverity.SUCCESS)
        self.refresh_views()
        return removed

    def request_toggle_upvote(self, recipe_id: int) -> Optional[Recipe]:
        recipe = self.catalog.toggle_upvote(recipe_id)
        self.refresh_views()
        return recipe

    def request_filter(self, search_term: str = "", category: str = "",
                       sort_mode: Optional[SortMode] = SortMode.NEWEST) -> List[Recipe]:
        self.current_filter = (search_term or "", category or "", resolve_sort_mode(sort_mode))
        results = self.catalog.filter(*self.current_filter)
        self.renderer.render(ALL_RECIPES_VIEW, results, self.catalog.upvoted_ids())
        return results

    # Helpers

    def _show_field_errors(self, error: ValidationError):
        log_event(logger, "form.rejected", logging.DEBUG, fields=",".join(error.field_errors))
        for field, message in error.field_errors.items():
            self.renderer.show_message(message, MessageSeverity.ERROR, field=field)

    def _pause(self, seconds: float):
        if seconds > 0:
            self.sleep(seconds)


def create_site_controller(storage, renderer: Optional[Renderer] = None,
                           config: Optional[Config] = None,
                           id_source: Optional[Callable[[], int]] = None,
                           sleep: Callable[[float], None] = time.sleep,
                           identity: str = DEFAULT_IDENTITY) -> SiteController:
    """
    Wire the core services over `storage` and return a controller.
    `identity` names the browser whose upvotes the catalog tracks.
    """
    config = config or get_config()
    accounts = AccountDirectory(storage, id_source=id_source, seed_demo_account=config.seed_demo_account)
    authenticator = SessionAuthenticator(storage, accounts)
    catalog = RecipeCatalog(storage, id_source=id_source, identity=identity)
    if config.seed_sample_recipes:
        catalog.ensure_sample_data()
    return SiteController(accounts, authenticator, catalog, renderer, config, sleep)
