"""
Security Service

Credential hashing and JWT session-token operations.

Security Features:
==================
1. Credentials hashed with PBKDF2-SHA256 (passlib); plaintext is never kept
2. Every credential comparison goes through verify_password()
3. Tokens are HS256-signed JWTs carrying the username in "sub"
4. Token verification is a pure function of (token, secret, now):
   no server-side session lookup, no revocation list

Usage:
    from book_catalog.services.security import create_access_token, decode_token

    token, expires_at = create_access_token("alice", secret, "HS256", timedelta(hours=1))
    username = decode_token(token, secret, "HS256")
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from book_catalog.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# pbkdf2_sha256 is salted and implemented on top of hashlib, so it needs no
# native backend.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text credential.

    Example:
        >>> hash_password("pw1").startswith("$pbkdf2-sha256$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain credential against its stored hash.

    Example:
        >>> hashed = hash_password("pw1")
        >>> verify_password("pw1", hashed)
        True
        >>> verify_password("pw2", hashed)
        False
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# JWT Tokens
# -------------------------------------------------------------------------
TOKEN_TYPE = "access"


def create_access_token(
    username: str,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """
    Mint a signed token bound to username.

    Args:
        username: Identity carried in the "sub" claim
        secret_key: Signing secret
        algorithm: JWT algorithm, e.g. HS256
        expires_delta: Token lifetime
        now: Issue time (defaults to the current time)

    Returns:
        Tuple of (encoded token, expiry datetime)
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + expires_delta

    claims = {
        "sub": username,
        "iat": issued_at,
        "exp": expires_at,
        "type": TOKEN_TYPE,
    }
    encoded_jwt = jwt.encode(claims, secret_key, algorithm=algorithm)

    return encoded_jwt, expires_at


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str,
    now: datetime | None = None,
) -> str:
    """
    Validate a token and return the username it is bound to.

    The signature is checked by python-jose; expiry is checked here
    against now so callers can evaluate a token at any instant.

    Raises:
        InvalidTokenError: Bad signature, malformed token or claims
        ExpiredTokenError: Token is past its expiry
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"verify_exp": False},
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise InvalidTokenError("Invalid token") from e

    if payload.get("type") != TOKEN_TYPE:
        raise InvalidTokenError("Invalid token type")

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise InvalidTokenError("Invalid token payload")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidTokenError("Invalid token payload")

    current = now or datetime.now(UTC)
    if current.timestamp() > exp:
        raise ExpiredTokenError("Token has expired")

    return username
