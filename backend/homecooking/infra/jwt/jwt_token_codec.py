# homecooking/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from homecooking.models.user import Role
from homecooking.services._shared.ports.token_codec import (
    TokenClaims,
    TokenCodec,
    TokenExpiredError,
    TokenKind,
    TokenMalformedError,
    TokenSignatureError,
    TokenSubject,
)

ALGORITHM = "HS256"
REFRESH_TOKEN_LIFETIME = timedelta(days=7)
_REQUIRED_CLAIMS = ["sub", "user_id", "email", "role", "type", "iat", "exp", "jti"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class TokenCodecConfig:
    """
    Secrets and lifetimes for :class:`JWTTokenCodec`.

    :param access_secret: HS256 key for access tokens.
    :param refresh_secret: HS256 key for refresh tokens (must differ).
    :param access_ttl: Access token lifetime.
    :param refresh_ttl: Refresh token lifetime (one week).
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(hours=24)
    refresh_ttl: timedelta = REFRESH_TOKEN_LIFETIME

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Both token secrets are required.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh secrets must differ.")
        if self.access_ttl <= timedelta(0) or self.refresh_ttl <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenCodecConfig:
        """Build from a Flask config mapping (the only place config keys are read)."""
        return cls(
            access_secret=str(config["JWT_SECRET_KEY"]),
            refresh_secret=str(config["JWT_REFRESH_SECRET_KEY"]),
            access_ttl=timedelta(hours=int(config["TOKEN_EXPIRY_HOURS"])),
            refresh_ttl=timedelta(
                hours=int(config.get("REFRESH_TOKEN_EXPIRY_HOURS", 7 * 24))
            ),
        )


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    PyJWT adapter for the :class:`TokenCodec` port.

    Each token kind is signed with its own secret and additionally carries
    a ``type`` claim, so a token is only accepted for the kind it was minted
    for even if the two secrets were ever configured identically.
    """

    config: TokenCodecConfig
    clock: Callable[[], datetime] = field(default=_utcnow)

    @property
    def access_lifetime_seconds(self) -> int:
        return int(self.config.access_ttl.total_seconds())

    # -------------------- issuing --------------------

    def issue_access_token(self, subject: TokenSubject) -> str:
        return self._encode(subject, TokenKind.ACCESS)

    def issue_refresh_token(self, subject: TokenSubject) -> str:
        return self._encode(subject, TokenKind.REFRESH)

    def _secret(self, kind: TokenKind) -> str:
        if kind is TokenKind.ACCESS:
            return self.config.access_secret
        return self.config.refresh_secret

    def _ttl(self, kind: TokenKind) -> timedelta:
        if kind is TokenKind.ACCESS:
            return self.config.access_ttl
        return self.config.refresh_ttl

    def _encode(self, subject: TokenSubject, kind: TokenKind) -> str:
        now = self.clock()
        payload: dict[str, Any] = {
            "sub": str(subject.user_id),
            "user_id": str(subject.user_id),
            "email": subject.email,
            "role": Role.parse(subject.role).value,
            "type": kind.value,
            "iat": now,
            "exp": now + self._ttl(kind),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret(kind), algorithm=ALGORITHM)

    # -------------------- verification --------------------

    def verify(self, token: str, kind: TokenKind) -> TokenClaims:
        if not token or not isinstance(token, str):
            raise TokenMalformedError("Empty token.")
        try:
            payload = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired.") from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureError("Token signature mismatch.") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError(str(exc)) from exc

        if payload.get("type") != kind.value:
            raise TokenSignatureError(f"Expected a {kind.value} token.")

        try:
            user_id = uuid.UUID(str(payload["user_id"]))
            role = Role.parse(payload["role"])
        except (TypeError, ValueError) as exc:
            raise TokenMalformedError("Token claims are malformed.") from exc
        if str(payload["sub"]) != str(user_id):
            raise TokenMalformedError("Token subject does not match user_id.")

        return TokenClaims(
            user_id=user_id,
            email=str(payload["email"]),
            role=role,
            kind=kind,
            jti=str(payload["jti"]),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
