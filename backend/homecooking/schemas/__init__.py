"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RefreshSchema, RegisterSchema, TokenPairSchema
from .common import CodeSchema
from .invite import InviteCreateSchema, InviteSchema
from .share_code import (
    ShareCodeCreateSchema,
    ShareCodeSchema,
    ShareCodeWithRecipeSchema,
    SharedRecipeSchema,
)
from .user import UserSchema

__all__ = [
    "CodeSchema",
    "InviteCreateSchema",
    "InviteSchema",
    "LoginSchema",
    "RefreshSchema",
    "RegisterSchema",
    "ShareCodeCreateSchema",
    "ShareCodeSchema",
    "ShareCodeWithRecipeSchema",
    "SharedRecipeSchema",
    "TokenPairSchema",
    "UserSchema",
]
