"""
Storage configuration for RECOOK BOOK.

Resolves where the durable tier lives and builds the per-session store.
The durable backend is created once per process and shared by every
browser session; the session tier is each browser session's own state.
"""

import os
import streamlit as st
from typing import Dict, Any

from services import StorageService, SQLiteKeyValueBackend, StreamlitSessionBackend
from utils import get_config


class StorageConfig:
    """Durable storage location manager"""

    @staticmethod
    def get_storage_path() -> str:
        """Get SQLite path for the durable tier"""
        # Try environment variable first
        storage_path = os.getenv('RECOOK_STORAGE_PATH')
        if storage_path:
            return storage_path

        # Try Streamlit secrets
        try:
            if 'RECOOK_STORAGE_PATH' in st.secrets:
                return st.secrets['RECOOK_STORAGE_PATH']
        except FileNotFoundError:
            pass

        return get_config().storage_path


@st.cache_resource
def get_durable_backend(storage_path: str) -> SQLiteKeyValueBackend:
    """Process-wide durable backend, shared across browser sessions"""
    return SQLiteKeyValueBackend(storage_path)


def get_storage_service() -> StorageService:
    """Storage for the current browser session"""
    durable = get_durable_backend(StorageConfig.get_storage_path())
    return StorageService(durable, StreamlitSessionBackend(st.session_state))


def get_storage_info() -> Dict[str, Any]:
    """Get storage configuration info"""
    path = StorageConfig.get_storage_path()

    return {
        'type': 'sqlite',
        'path': path,
        'location': 'In memory' if path == ':memory:' else 'Local file'
    }
