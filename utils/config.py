"""
Configuration management for RECOOK BOOK.

Handles environment variables, storage settings, and application configuration.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Config:
    """Application configuration settings"""

    # Storage settings
    storage_path: str = "recook_book.db"

    # First-use seeding
    seed_demo_account: bool = True
    seed_sample_recipes: bool = True

    # Authentication settings
    password_min_length: int = 8

    # Views
    featured_count: int = 3

    # Cosmetic pacing (seconds)
    loading_delay_seconds: float = 1.5
    redirect_delay_seconds: float = 2.0

    # Streamlit settings
    debug_mode: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: str = "recook_book.log"

    @classmethod
    def from_environment(cls) -> 'Config':
        """Create configuration from environment variables"""
        return cls(
            # Storage
            storage_path=os.getenv("RECOOK_STORAGE_PATH", "recook_book.db"),

            # Seeding
            seed_demo_account=os.getenv("RECOOK_SEED_DEMO_ACCOUNT", "true").lower() == "true",
            seed_sample_recipes=os.getenv("RECOOK_SEED_SAMPLE_RECIPES", "true").lower() == "true",

            # Authentication
            password_min_length=int(os.getenv("RECOOK_PASSWORD_MIN_LENGTH", "8")),

            # Views
            featured_count=int(os.getenv("RECOOK_FEATURED_COUNT", "3")),

            # Pacing
            loading_delay_seconds=float(os.getenv("RECOOK_LOADING_DELAY", "1.5")),
            redirect_delay_seconds=float(os.getenv("RECOOK_REDIRECT_DELAY", "2.0")),

            # Streamlit
            debug_mode=os.getenv("RECOOK_DEBUG", "false").lower() == "true",

            # Logging
            log_level=os.getenv("RECOOK_LOG_LEVEL", "INFO"),
            log_file=os.getenv("RECOOK_LOG_FILE", "recook_book.log")
        )

    def ensure_directories(self):
        """Create necessary directories"""
        directories = [
            Path(self.log_file).parent,
            Path(self.storage_path).parent
        ]

        for directory in directories:
            if directory and directory != Path("."):
                Path(directory).mkdir(parents=True, exist_ok=True)

    def uses_memory_storage(self) -> bool:
        """Check if the durable tier is an in-memory database"""
        return self.storage_path == ":memory:"


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_environment()
        if not _config.uses_memory_storage():
            _config.ensure_directories()
    return _config
