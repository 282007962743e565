"""User invite repository with an atomic single-use transition."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, or_, select, update

from homecooking.models.user_invite import UserInvite
from homecooking.repositories.base import BaseRepository


class UserInviteRepository(BaseRepository[UserInvite]):
    """Persistence-only repository for :class:`UserInvite`."""

    model = UserInvite
    default_sort = ("-created_at",)

    def _sortable_fields(self):
        return {
            "created_at": UserInvite.created_at,
            "expires_at": UserInvite.expires_at,
        }

    def _filterable_fields(self):
        return {
            "code": UserInvite.code,
            "created_by": UserInvite.created_by,
        }

    def get_by_code(self, code: str, *, fresh: bool = False) -> UserInvite | None:
        """Look up by code; ``fresh`` bypasses the identity map."""
        if fresh:
            return self._reload(code)
        return self.find_one(code=code)

    def mark_used(self, code: str, *, used_by: UUID, now: datetime) -> UserInvite | None:
        """
        Flip ``used_at``/``used_by`` exactly once.

        Only an unused, unexpired invite matches the ``WHERE`` clause, so a
        second redemption (concurrent or not) affects zero rows.

        :returns: The refreshed invite, or ``None`` when it was not redeemable.
        """
        stmt = (
            update(UserInvite)
            .where(
                UserInvite.code == code,
                UserInvite.used_at.is_(None),
                or_(UserInvite.expires_at.is_(None), UserInvite.expires_at >= now),
            )
            .values(used_at=now, used_by=used_by)
            .execution_options(synchronize_session=False)
        )
        result = cast(CursorResult[Any], self.session.execute(stmt))
        if result.rowcount != 1:
            return None
        return self._reload(code)

    def _reload(self, code: str) -> UserInvite | None:
        stmt = (
            select(UserInvite)
            .where(UserInvite.code == code)
            .execution_options(populate_existing=True)
        )
        return cast(UserInvite | None, self.session.execute(stmt).scalars().first())
