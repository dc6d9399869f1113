"""Streamlit-side storage wiring for RECOOK BOOK."""

from .storage_config import StorageConfig, get_storage_service, get_storage_info

__all__ = [
    'StorageConfig',
    'get_storage_service',
    'get_storage_info'
]
