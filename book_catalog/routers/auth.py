"""
Authentication Router

Handles user authentication endpoints:
- Registration (username/password)
- Login (username/password -> JWT access token)
- Get current user (from JWT token)

Security:
=========
- Passwords are hashed before storage and never logged
- Tokens are stateless signed JWTs, valid for ACCESS_TOKEN_EXPIRE_MINUTES
- There is no logout: a token stays valid until it expires
"""

from fastapi import APIRouter, Request, status

from book_catalog.dependencies import CurrentUsername, Registry
from book_catalog.schemas import (
    CurrentUserResponse,
    RegisterResponse,
    TokenResponse,
    UserCredentials,
)
from book_catalog.services.rate_limiter import limiter, tier

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request (username already exists)"},
        401: {"description": "Unauthorized"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account. Usernames are unique; there are no password rules.",
)
@limiter.limit(tier("auth"))
def register(
    request: Request,
    user_data: UserCredentials,
    registry: Registry,
) -> RegisterResponse:
    """
    Register a new user.

    Raises:
        DuplicateUserError: 400 if the username is taken
    """
    user = registry.register(user_data.username, user_data.password)
    return RegisterResponse(message="User registered successfully", username=user.username)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    description="""
    Authenticate with username and password to receive a JWT access token.

    **Usage:**
    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <access_token>
    ```
    """,
)
@limiter.limit(tier("auth"))
def login(
    request: Request,
    credentials: UserCredentials,
    registry: Registry,
) -> TokenResponse:
    """
    Authenticate a user and return an access token.

    Raises:
        InvalidCredentialsError: 401 if the username/password pair is unknown
    """
    access = registry.login(credentials.username, credentials.password)

    return TokenResponse(
        message="Login successful",
        access_token=access.token,
        token_type=access.token_type,
        expires_in=access.expires_in(),
    )


# -------------------------------------------------------------------------
# Get Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    description="Return the username bound to the presented bearer token.",
)
@limiter.limit(tier("default"))
def get_me(request: Request, username: CurrentUsername) -> CurrentUserResponse:
    return CurrentUserResponse(username=username)
