"""
Account models for RECOOK BOOK.

Accounts are stored as plain records in the durable tier. Passwords are kept
in clear text; the site has no server side and no hashing model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any

from .timestamps import parse_timestamp, format_timestamp


@dataclass
class Account:
    """
    Registered site account.
    Created by signup and never mutated afterwards.
    """
    id: int
    first_name: str
    last_name: str
    email: str
    password: str
    newsletter: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def get_display_name(self) -> str:
        """Get account's display name"""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        else:
            return self.email.split('@')[0]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored record shape"""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'password': self.password,
            'newsletter': self.newsletter,
            'createdAt': format_timestamp(self.created_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Build an account from a stored record"""
        return cls(
            id=int(data['id']),
            first_name=data.get('firstName', ''),
            last_name=data.get('lastName', ''),
            email=data['email'],
            password=data.get('password', ''),
            newsletter=bool(data.get('newsletter', False)),
            created_at=parse_timestamp(data.get('createdAt'))
        )
