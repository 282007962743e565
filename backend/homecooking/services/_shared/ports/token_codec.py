from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from homecooking.models.user import Role


class TokenKind(str, Enum):
    """The two token classes; each is signed with its own secret."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenSubject:
    """
    Identity snapshot embedded in a token.

    :param user_id: Account identifier.
    :param email: Account email at issuance time.
    :param role: Account role at issuance time.
    """

    user_id: uuid.UUID
    email: str
    role: Role


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Decoded, verified token payload."""

    user_id: uuid.UUID
    email: str
    role: Role
    kind: TokenKind
    jti: str
    issued_at: datetime
    expires_at: datetime


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """The token's ``exp`` lies in the past."""


class TokenSignatureError(TokenError):
    """The signature does not verify under the secret for the requested kind."""


class TokenMalformedError(TokenError):
    """The token cannot be parsed or lacks required claims."""


class TokenCodec(Protocol):
    """Port for issuing and verifying signed access/refresh tokens."""

    @property
    def access_lifetime_seconds(self) -> int: ...

    def issue_access_token(self, subject: TokenSubject) -> str: ...

    def issue_refresh_token(self, subject: TokenSubject) -> str: ...

    def verify(self, token: str, kind: TokenKind) -> TokenClaims:
        """
        Verify ``token`` as a token of ``kind``.

        :raises TokenExpiredError: When the token is past its expiry.
        :raises TokenSignatureError: When the signature or claimed kind mismatches.
        :raises TokenMalformedError: When the token cannot be decoded.
        """
        ...
