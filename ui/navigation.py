"""Page identity, browser identity and navigation through query parameters."""

import uuid

import streamlit as st

from services.auth_service import HOME_PAGE

PAGE_PARAM = "page"
VISITOR_PARAM = "visitor"
VISITOR_STATE_KEY = "recook_book_visitor"


def current_page() -> str:
    """Page identity requested by this script run"""
    return st.query_params.get(PAGE_PARAM, HOME_PAGE)


def browser_identity() -> str:
    """
    Stable id for this browser's upvote record.

    Carried in the `visitor` query parameter, so reloads and bookmarks keep
    the same record, and mirrored in session state in case a link drops it.
    """
    identity = st.query_params.get(VISITOR_PARAM) or st.session_state.get(VISITOR_STATE_KEY)
    if not identity:
        identity = uuid.uuid4().hex
    st.session_state[VISITOR_STATE_KEY] = identity
    if st.query_params.get(VISITOR_PARAM) != identity:
        st.query_params[VISITOR_PARAM] = identity
    return identity


def navigate(page: str):
    """Move to `page`; the next run starts with fresh page-load gating"""
    st.query_params[PAGE_PARAM] = page
    st.rerun()
