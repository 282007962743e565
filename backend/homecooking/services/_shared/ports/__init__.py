"""
homecooking.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) for token infrastructure.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`: issuing and verifying access/refresh
    tokens, plus the claim value objects and verification errors.

- :mod:`refresh_token_registry`:
    Defines :class:`~.RefreshTokenRegistry`: optional single-use tracking
    for refresh tokens.

Concrete adapters (PyJWT, Redis) live under ``homecooking.infra``.
"""

from __future__ import annotations

from .refresh_token_registry import InMemoryRefreshTokenRegistry, RefreshTokenRegistry
from .token_codec import (
    TokenClaims,
    TokenCodec,
    TokenError,
    TokenExpiredError,
    TokenKind,
    TokenMalformedError,
    TokenSignatureError,
    TokenSubject,
)

__all__ = [
    "InMemoryRefreshTokenRegistry",
    "RefreshTokenRegistry",
    "TokenClaims",
    "TokenCodec",
    "TokenError",
    "TokenExpiredError",
    "TokenKind",
    "TokenMalformedError",
    "TokenSignatureError",
    "TokenSubject",
]
