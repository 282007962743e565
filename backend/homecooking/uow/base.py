"""
Abstract Unit of Work contracts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from homecooking.repositories import (
        RecipeRepository,
        ShareCodeRepository,
        UserInviteRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    Coordinates a transactional boundary for a use-case.

    Responsibilities:
    - Provide access to repositories bound to the same session/transaction.
    - Commit on success, rollback on error.
    """

    users: UserRepository
    recipes: RecipeRepository
    share_codes: ShareCodeRepository
    invites: UserInviteRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
