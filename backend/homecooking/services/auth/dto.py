# homecooking/services/auth/dto.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from homecooking.models.user import Role

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-registration.

    :param email: Login email (trimmed, case preserved).
    :type email: str
    :param password: Raw password (hashed by the model setter).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public view of a user account; never carries the password hash."""

    id: uuid.UUID
    email: str
    role: Role
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param expires_in: Access token lifetime in seconds.
    :type expires_in: int
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "Bearer"
