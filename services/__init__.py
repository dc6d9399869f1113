"""
Services package for RECOOK BOOK.

Contains the persistent store, account directory, session authenticator,
recipe catalog, form validation, and the site controller that connects
them to the presentation layer.
"""

from .errors import (
    RecookBookError, DuplicateEmailError, InvalidCredentialsError,
    ValidationError, CorruptStoredDataError
)
from .storage_service import (
    StorageService, StorageTier, SQLiteKeyValueBackend,
    MemorySessionBackend, StreamlitSessionBackend
)
from .account_service import AccountDirectory
from .auth_service import SessionAuthenticator
from .recipe_service import RecipeCatalog
from .site_controller import (
    SiteController, Renderer, MessageSeverity, create_site_controller,
    ALL_RECIPES_VIEW, FEATURED_VIEW
)

__all__ = [
    'RecookBookError',
    'DuplicateEmailError',
    'InvalidCredentialsError',
    'ValidationError',
    'CorruptStoredDataError',
    'StorageService',
    'StorageTier',
    'SQLiteKeyValueBackend',
    'MemorySessionBackend',
    'StreamlitSessionBackend',
    'AccountDirectory',
    'SessionAuthenticator',
    'RecipeCatalog',
    'SiteController',
    'Renderer',
    'MessageSeverity',
    'create_site_controller',
    'ALL_RECIPES_VIEW',
    'FEATURED_VIEW'
]
