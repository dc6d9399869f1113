"""
UI components for RECOOK BOOK.

Contains the Streamlit renderer and page interfaces for login, signup,
recipe browsing, and recipe submission.
"""

from .renderer import StreamlitRenderer
from .navigation import current_page, browser_identity, navigate
from .auth import AuthenticationInterface
from .recipe_browser import RecipeBrowser
from .recipe_form import RecipeSubmissionForm

__all__ = [
    'StreamlitRenderer',
    'current_page',
    'browser_identity',
    'navigate',
    'AuthenticationInterface',
    'RecipeBrowser',
    'RecipeSubmissionForm'
]
