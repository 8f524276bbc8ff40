"""
Identity Service

IdentityRegistry keeps the registered users and issues/validates bearer
tokens.

Business Rules:
- Usernames are unique; a second registration fails
- No credential-strength rules
- login() succeeds only for a username + credential pair that was
  registered, and returns a token valid for one hour by default
- verify() trusts the signed claim: it does not look the user up again
"""

import logging
import threading
from datetime import UTC, datetime, timedelta

from book_catalog.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    MissingTokenError,
)
from book_catalog.models import AccessToken, User
from book_catalog.services.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=1)


class IdentityRegistry:
    """Registered users plus stateless token issuance."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._token_ttl = token_ttl
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def register(self, username: str, credential: str) -> User:
        """
        Create a user.

        Raises:
            DuplicateUserError: If username is already registered
        """
        # Hash outside the lock, it is the slow part
        hashed = hash_password(credential)
        with self._lock:
            if username in self._users:
                raise DuplicateUserError("User already exists")
            user = User(username=username, hashed_password=hashed)
            self._users[username] = user

        logger.info(f"New user registered: {username}")
        return user

    def login(self, username: str, credential: str, now: datetime | None = None) -> AccessToken:
        """
        Exchange a username + credential for a session token.

        Raises:
            InvalidCredentialsError: If the pair does not match a registered user
        """
        user = self._users.get(username)
        if user is None or not verify_password(credential, user.hashed_password):
            logger.warning(f"Login failed for {username}")
            raise InvalidCredentialsError("Invalid credentials")

        token, expires_at = create_access_token(
            username,
            self._secret_key,
            self._algorithm,
            self._token_ttl,
            now=now,
        )

        logger.info(f"User logged in: {username}")
        return AccessToken(token=token, username=username, expires_at=expires_at)

    def verify(self, token: str | None, now: datetime | None = None) -> str:
        """
        Resolve a raw bearer token to the username it is bound to.

        Raises:
            MissingTokenError: If no token was supplied
            InvalidTokenError: If the signature or claims are invalid
            ExpiredTokenError: If the token is past its expiry
        """
        if not token:
            raise MissingTokenError("Not authenticated")
        return decode_token(
            token,
            self._secret_key,
            self._algorithm,
            now=now or datetime.now(UTC),
        )
