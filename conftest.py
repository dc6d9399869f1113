"""
Shared pytest fixtures for RECOOK BOOK tests.

Every test gets an in-memory durable tier, a dict-backed session tier,
counter ids and a stepping clock, so results never depend on wall time.
"""

from datetime import datetime, timedelta

import pytest

from services import (
    StorageService, SQLiteKeyValueBackend, MemorySessionBackend,
    AccountDirectory, SessionAuthenticator, RecipeCatalog, SiteController, Renderer
)
from utils import Config, CounterIdSource


class StepClock:
    """Returns a time one minute later on every call"""

    def __init__(self, start: datetime = datetime(2025, 3, 1, 12, 0)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


class RecordingRenderer(Renderer):
    """Captures every render instruction for assertions"""

    def __init__(self):
        self.renders = []
        self.sessions = []
        self.messages = []

    def render(self, view, recipes, upvoted_ids):
        self.renders.append((view, list(recipes), set(upvoted_ids)))

    def render_auth_state(self, session):
        self.sessions.append(session)

    def show_message(self, text, severity=None, field=None):
        self.messages.append((text, severity, field))

    def last_view(self, view):
        for name, recipes, upvoted in reversed(self.renders):
            if name == view:
                return recipes
        return None


@pytest.fixture
def storage():
    return StorageService(SQLiteKeyValueBackend(":memory:"), MemorySessionBackend())


@pytest.fixture
def id_source():
    return CounterIdSource(start=1000)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def accounts(storage, id_source, clock):
    return AccountDirectory(storage, id_source=id_source, clock=clock)


@pytest.fixture
def authenticator(storage, accounts):
    return SessionAuthenticator(storage, accounts)


@pytest.fixture
def catalog(storage, id_source, clock):
    return RecipeCatalog(storage, id_source=id_source, clock=clock)


@pytest.fixture
def test_config():
    return Config(
        storage_path=":memory:",
        seed_sample_recipes=False,
        loading_delay_seconds=0,
        redirect_delay_seconds=0
    )


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def controller(accounts, authenticator, catalog, renderer, test_config):
    return SiteController(accounts, authenticator, catalog, renderer, test_config)


def recipe_fields(**overrides):
    """Valid recipe submission fields"""
    fields = {
        'title': "Test",
        'category': "snack",
        'prep_time': 5,
        'leftover_ingredients': "X",
        'instructions': "Y",
        'author': "Z"
    }
    fields.update(overrides)
    return fields
