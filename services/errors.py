"""
Error types raised by RECOOK BOOK services.

All of them are recoverable: the site controller turns them into inline
messages, and the store absorbs corrupt data by treating it as absent.
"""

from typing import Dict


class RecookBookError(Exception):
    """Base class for service errors"""


class DuplicateEmailError(RecookBookError):
    """Signup attempted with an email that already has an account"""

    def __init__(self, email: str):
        super().__init__(f"An account with this email already exists: {email}")
        self.email = email


class InvalidCredentialsError(RecookBookError):
    """Login attempted with an unknown email or wrong password"""

    def __init__(self):
        super().__init__("Invalid email or password")


class ValidationError(RecookBookError):
    """Caller-side pre-condition failed; carries one message per form field"""

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__("; ".join(field_errors.values()))
        self.field_errors = field_errors


class CorruptStoredDataError(RecookBookError):
    """Stored text could not be decoded"""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Corrupt stored value for '{key}': {reason}")
        self.key = key
