"""
Data models for RECOOK BOOK.

This module contains the Account, Recipe, and session model classes.
Models map directly to the records kept in the durable and session tiers.
"""

from .account_models import Account
from .recipe_models import (
    Recipe, SortMode, RECIPE_CATEGORIES, MIN_PREP_TIME_MINUTES, MAX_PREP_TIME_MINUTES, split_lines
)
from .session_models import SessionState, AccessDecision, AccessOutcome

__all__ = [
    'Account',
    'Recipe',
    'SortMode',
    'RECIPE_CATEGORIES',
    'MIN_PREP_TIME_MINUTES',
    'MAX_PREP_TIME_MINUTES',
    'split_lines',
    'SessionState',
    'AccessDecision',
    'AccessOutcome'
]
