"""
Access Token Model

Result of a successful login. The token itself is a signed JWT; nothing
about it is stored server-side.
"""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class AccessToken:
    token: str
    username: str
    expires_at: datetime
    token_type: str = "bearer"

    def expires_in(self, now: datetime | None = None) -> int:
        """Seconds until expiry, never negative."""
        now = now or datetime.now(UTC)
        return max(0, int((self.expires_at - now).total_seconds()))
