"""
Tests for the site controller.
Each event must leave every rendered view consistent with storage before
it returns.
"""

from conftest import RecordingRenderer, recipe_fields
from models import SortMode
from services import (
    ALL_RECIPES_VIEW, FEATURED_VIEW, MessageSeverity, SiteController, StorageTier,
    create_site_controller
)
from utils import Config, CounterIdSource


def signup(controller, email="jane@example.com"):
    return controller.submit_signup({
        'first_name': "Jane",
        'last_name': "Doe",
        'email': email,
        'password': "Secret123",
        'confirm_password': "Secret123",
        'terms_agreed': True
    })


def test_anonymous_restricted_page_load_renders_nothing(controller, renderer):
    decision = controller.page_load("recipes.html")

    assert decision.redirect_to == "login.html"
    assert renderer.renders == []
    assert renderer.sessions == []
    assert renderer.messages[-1][0] == "Please login to access RECOOK BOOK"


def test_granted_page_load_renders_all_views(controller, renderer, catalog):
    catalog.add(recipe_fields())

    decision = controller.page_load("splash.html")

    assert decision.is_granted
    assert not renderer.sessions[-1].is_authenticated
    assert [r.title for r in renderer.last_view(ALL_RECIPES_VIEW)] == ["Test"]
    assert [r.title for r in renderer.last_view(FEATURED_VIEW)] == ["Test"]


def test_page_load_purges_persistent_login(controller, storage):
    storage.write(StorageTier.DURABLE, "currentUser", {'id': 1})

    controller.page_load("login.html")

    assert storage.read(StorageTier.DURABLE, "currentUser") is None


def test_signup_creates_account(controller, accounts, renderer):
    account = signup(controller)

    assert account is not None
    assert accounts.find_by_email("jane@example.com").id == account.id
    assert renderer.messages[-1][1] is MessageSeverity.SUCCESS


def test_duplicate_signup_reports_email_error(controller, accounts, renderer):
    signup(controller)
    count = accounts.account_count()

    assert signup(controller) is None
    assert accounts.account_count() == count
    assert renderer.messages[-1] == (
        "An account with this email already exists", MessageSeverity.ERROR, 'email'
    )


def test_invalid_signup_never_reaches_directory(controller, accounts, renderer):
    result = controller.submit_signup({'email': "bad", 'password': "x"})

    assert result is None
    assert accounts.find_by_email("bad") is None
    fields = {field for _, _, field in renderer.messages}
    assert {'first_name', 'email', 'password', 'terms_agreed'} <= fields


def test_login_returns_to_denied_page(controller, renderer):
    signup(controller)
    controller.page_load("recipes.html")

    destination = controller.submit_login("jane@example.com", "Secret123")

    assert destination == "recipes.html"
    assert renderer.sessions[-1].is_authenticated
    assert controller.page_load("recipes.html").is_granted


def test_login_without_pending_target_goes_to_splash(controller):
    assert controller.submit_login("demo@recookbook.com", "Demo123!") == "splash.html"


def test_failed_login_reports_invalid_credentials(controller, authenticator, renderer):
    assert controller.submit_login("demo@recookbook.com", "wrong") is None
    assert not authenticator.current_session().is_authenticated
    assert renderer.messages[-1] == ("Invalid email or password", MessageSeverity.ERROR, 'password')


def test_authenticated_login_page_redirects_home(controller):
    controller.submit_login("demo@recookbook.com", "Demo123!")

    assert controller.page_load("login.html").redirect_to == "index.html"


def test_logout_rerenders_anonymous_state(controller, renderer):
    controller.submit_login("demo@recookbook.com", "Demo123!")

    assert controller.request_logout() == "login.html"
    assert not renderer.sessions[-1].is_authenticated


def test_submit_recipe_updates_views_before_returning(controller, renderer):
    recipe = controller.submit_recipe(recipe_fields(prep_time="5"))

    assert recipe.upvotes == 0
    assert renderer.last_view(ALL_RECIPES_VIEW)[0].id == recipe.id
    assert renderer.last_view(FEATURED_VIEW)[0].id == recipe.id


def test_invalid_recipe_is_not_added(controller, catalog, renderer):
    assert controller.submit_recipe(recipe_fields(prep_time=500)) is None
    assert catalog.count() == 0
    assert renderer.messages[-1][2] == 'prep_time'


def test_toggle_upvote_rerenders_featured(controller, renderer, catalog):
    first = catalog.add(recipe_fields(title="First"))
    catalog.add(recipe_fields(title="Second"))

    controller.request_toggle_upvote(first.id)

    featured = renderer.last_view(FEATURED_VIEW)
    assert featured[0].title == "First"
    assert featured[0].upvotes == 1
    assert first.id in renderer.renders[-1][2]


def test_delete_rerenders_without_recipe(controller, renderer, catalog):
    recipe = catalog.add(recipe_fields())

    assert controller.request_delete(recipe.id) is True
    assert controller.request_delete(recipe.id) is False
    assert renderer.last_view(ALL_RECIPES_VIEW) == []
    assert renderer.last_view(FEATURED_VIEW) == []


def test_filter_is_kept_across_mutations(controller, renderer, catalog):
    catalog.add(recipe_fields(title="Fried Rice", category="dinner"))
    catalog.add(recipe_fields(title="Toast", category="breakfast"))

    results = controller.request_filter("", "dinner", SortMode.ALPHABETICAL)
    assert [r.title for r in results] == ["Fried Rice"]

    controller.submit_recipe(recipe_fields(title="Curry", category="dinner"))

    assert [r.title for r in renderer.last_view(ALL_RECIPES_VIEW)] == ["Curry", "Fried Rice"]


def test_cosmetic_delays_use_injected_sleep(accounts, authenticator, catalog, renderer):
    pauses = []
    config = Config(storage_path=":memory:", loading_delay_seconds=1.5, redirect_delay_seconds=2.0)
    controller = SiteController(accounts, authenticator, catalog, renderer, config, sleep=pauses.append)

    controller.submit_login("demo@recookbook.com", "Demo123!")

    assert pauses == [1.5, 2.0]


def test_create_site_controller_seeds_samples(storage, renderer):
    config = Config(storage_path=":memory:", loading_delay_seconds=0, redirect_delay_seconds=0)

    controller = create_site_controller(storage, renderer, config, id_source=CounterIdSource(start=5000))
    controller.page_load("splash.html")

    assert len(renderer.last_view(ALL_RECIPES_VIEW)) == 5
    assert [r.upvotes for r in renderer.last_view(FEATURED_VIEW)] == [31, 24, 22]


def test_filter_without_sort_mode_lists_newest_first(controller, catalog):
    catalog.add(recipe_fields(title="Older"))
    catalog.add(recipe_fields(title="Newer"))

    results = controller.request_filter("", "", None)

    assert [r.title for r in results] == ["Newer", "Older"]
    assert controller.current_filter[2] is SortMode.NEWEST


def test_controllers_for_different_browsers_keep_separate_upvotes(storage):
    config = Config(storage_path=":memory:", seed_sample_recipes=False,
                    loading_delay_seconds=0, redirect_delay_seconds=0)
    first_renderer, second_renderer = RecordingRenderer(), RecordingRenderer()
    first = create_site_controller(storage, first_renderer, config, identity="first-browser")
    second = create_site_controller(storage, second_renderer, config, identity="second-browser")
    recipe = first.submit_recipe(recipe_fields())

    first.request_toggle_upvote(recipe.id)
    second.page_load("splash.html")

    assert recipe.id not in second_renderer.renders[-1][2]
    assert second.request_toggle_upvote(recipe.id).upvotes == 2
