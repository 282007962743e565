"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`homecooking.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``homecooking.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Auth service (from ``homecooking.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`RefreshIn`,
      :class:`UserOut`, :class:`TokenPairOut`

- Share code service (from ``homecooking.services.share_codes``)
    * :class:`ShareCodeService`
    * DTOs: :class:`ShareCodeCreateIn`, :class:`ShareCodeOut`,
      :class:`ShareCodeWithRecipeOut`, :class:`SharedRecipeOut`

- Invite service (from ``homecooking.services.invites``)
    * :class:`UserInviteService`
    * DTOs: :class:`InviteCreateIn`, :class:`InviteUseIn`, :class:`UserInviteOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Auth service + DTOs
from .auth import AuthService, LoginIn, RefreshIn, RegisterIn, TokenPairOut, UserOut

# Invite service + DTOs
from .invites import InviteCreateIn, InviteUseIn, UserInviteOut, UserInviteService

# Share code service + DTOs
from .share_codes import (
    ShareCodeCreateIn,
    ShareCodeOut,
    ShareCodeService,
    ShareCodeWithRecipeOut,
    SharedRecipeOut,
)

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Auth
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "UserOut",
    "TokenPairOut",
    # Share codes
    "ShareCodeService",
    "ShareCodeCreateIn",
    "ShareCodeOut",
    "ShareCodeWithRecipeOut",
    "SharedRecipeOut",
    # Invites
    "UserInviteService",
    "InviteCreateIn",
    "InviteUseIn",
    "UserInviteOut",
]
