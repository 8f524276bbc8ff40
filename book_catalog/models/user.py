"""
User Model

A registered account. Only the hashed credential is kept; see
services/security.py for the hashing scheme.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class User:
    username: str
    hashed_password: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
