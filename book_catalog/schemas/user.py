"""
User Pydantic Schemas

Schemas for registration and login.

- UserCredentials: username + password (register and login bodies)
- RegisterResponse: confirmation of a new account
- TokenResponse: bearer token returned by login
- CurrentUserResponse: identity bound to the presented token

There are no password-strength rules.
"""

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """
    Body of POST /auth/register and POST /auth/login.

    Example request body:
    {
        "username": "alice",
        "password": "pw1"
    }
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique username",
        examples=["alice"],
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Password",
        examples=["demoPass123!"],
    )


class RegisterResponse(BaseModel):
    message: str = Field(..., description="Human readable outcome")
    username: str = Field(..., description="The registered username")


class TokenResponse(BaseModel):
    """
    Schema for the login response.

    Use the token in subsequent requests:
        Authorization: Bearer <access_token>
    """

    message: str = Field(default="Login successful")
    access_token: str = Field(..., description="Signed JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Seconds until the token expires")


class CurrentUserResponse(BaseModel):
    username: str = Field(..., description="Username bound to the token")
