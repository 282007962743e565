"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from homecooking.repositories.base import BaseRepository, apply_sorting, parse_sort_tokens
from homecooking.repositories.recipe import RecipeRepository
from homecooking.repositories.share_code import ShareCodeRepository
from homecooking.repositories.user import UserRepository
from homecooking.repositories.user_invite import UserInviteRepository

__all__ = [
    # Base
    "BaseRepository",
    "apply_sorting",
    "parse_sort_tokens",
    # Domain
    "RecipeRepository",
    "ShareCodeRepository",
    "UserInviteRepository",
    "UserRepository",
]
