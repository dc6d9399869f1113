#!/usr/bin/env python3
"""
RECOOK BOOK - Main Application Entry Point

A community cookbook for recipes built around leftovers.
Every script run is a page load: access is gated before anything is drawn.
"""

import sys
import streamlit as st
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from config import get_storage_service, get_storage_info
from services import create_site_controller
from services.auth_service import LOGIN_PAGE, SIGNUP_PAGE, SPLASH_PAGE, HOME_PAGE
from ui import (
    StreamlitRenderer, AuthenticationInterface, RecipeBrowser, RecipeSubmissionForm,
    browser_identity, current_page, navigate
)
from utils import get_config, setup_logging

RECIPES_PAGE = "recipes.html"
SUBMIT_PAGE = "submit.html"

NAVIGATION = [
    ("🏠 Home", HOME_PAGE),
    ("📚 Recipes", RECIPES_PAGE),
    ("🍳 Share a Recipe", SUBMIT_PAGE)
]


@st.cache_resource
def init_logging():
    """Configure logging once per process"""
    return setup_logging()


def render_splash_page(renderer: StreamlitRenderer):
    st.title("🍽️ Welcome to RECOOK BOOK")
    session = renderer.session
    if session.is_authenticated:
        st.markdown(f"### Hello, {session.account.first_name}! Ready to cook up your leftovers?")
    else:
        st.markdown("### Share and discover recipes that turn leftovers into meals.")

    if st.button("🍳 Start Cooking", type="primary"):
        navigate(HOME_PAGE if session.is_authenticated else LOGIN_PAGE)


def render_navigation(page: str):
    st.sidebar.title("🍽️ RECOOK BOOK")
    st.sidebar.markdown("*Cook smart. Waste less.*")

    for label, target in NAVIGATION:
        if st.sidebar.button(label, key=f"nav_{target}", disabled=(page == target)):
            navigate(target)

    if get_config().debug_mode:
        info = get_storage_info()
        st.sidebar.caption(f"🗄️ {info['location']}: {info['path']}")


def main():
    st.set_page_config(
        page_title="RECOOK BOOK",
        page_icon="🍽️",
        layout="wide",
        initial_sidebar_state="expanded"
    )
    init_logging()

    renderer = StreamlitRenderer()
    controller = create_site_controller(get_storage_service(), renderer, identity=browser_identity())

    page = current_page()
    decision = controller.page_load(page)
    if not decision.is_granted:
        navigate(decision.redirect_to)

    auth_ui = AuthenticationInterface(controller, renderer)
    browser = RecipeBrowser(controller, renderer)
    submission = RecipeSubmissionForm(controller, renderer)

    render_navigation(page)
    auth_ui.render_auth_sidebar()

    if page == LOGIN_PAGE:
        auth_ui.render_login_page()
    elif page == SIGNUP_PAGE:
        auth_ui.render_signup_page()
    elif page == SPLASH_PAGE:
        render_splash_page(renderer)
    elif page == RECIPES_PAGE:
        browser.render_recipes_page()
    elif page == SUBMIT_PAGE:
        submission.render_submit_page()
    else:
        browser.render_home_page()


if __name__ == "__main__":
    main()
