"""
Streamlit renderer for RECOOK BOOK.

Receives render instructions from the site controller. Recipe views and the
auth state are held until the page draws them; messages are shown at once.
"""

import streamlit as st
from typing import Dict, Iterable, List, Optional, Set

from models import Recipe, SessionState
from services import Renderer, MessageSeverity


class StreamlitRenderer(Renderer):
    """Collects view data for the page interfaces and shows banners"""

    def __init__(self):
        self.views: Dict[str, List[Recipe]] = {}
        self.upvoted_ids: Set[int] = set()
        self.session = SessionState.anonymous()
        self.field_errors: Dict[str, str] = {}

    def render(self, view: str, recipes: List[Recipe], upvoted_ids: Iterable[int]):
        self.views[view] = list(recipes)
        self.upvoted_ids = set(upvoted_ids)

    def render_auth_state(self, session: SessionState):
        self.session = session

    def show_message(self, text: str, severity: MessageSeverity = MessageSeverity.INFO,
                     field: Optional[str] = None):
        if field:
            self.field_errors[field] = text
            return

        if severity is MessageSeverity.SUCCESS:
            st.success(f"✅ {text}")
        elif severity is MessageSeverity.ERROR:
            st.error(f"❌ {text}")
        elif severity is MessageSeverity.WARNING:
            st.warning(f"⚠️ {text}")
        else:
            st.info(f"ℹ️ {text}")

    def show_field_errors(self):
        """Draw and clear the errors collected from the last form submission"""
        for message in self.field_errors.values():
            st.error(message)
        self.field_errors.clear()

    def recipes(self, view: str) -> List[Recipe]:
        return self.views.get(view, [])
