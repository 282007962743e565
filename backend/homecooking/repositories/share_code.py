"""Share code repository with an atomic redemption primitive."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, or_, select, update

from homecooking.models.share_code import ShareCode
from homecooking.repositories.base import BaseRepository


class ShareCodeRepository(BaseRepository[ShareCode]):
    """Persistence-only repository for :class:`ShareCode`."""

    model = ShareCode
    default_sort = ("-created_at",)

    def _sortable_fields(self):
        return {
            "created_at": ShareCode.created_at,
            "expires_at": ShareCode.expires_at,
            "use_count": ShareCode.use_count,
        }

    def _filterable_fields(self):
        return {
            "code": ShareCode.code,
            "recipe_id": ShareCode.recipe_id,
        }

    def get_by_code(self, code: str, *, fresh: bool = False) -> ShareCode | None:
        """Look up by code; ``fresh`` bypasses the identity map."""
        if fresh:
            return self._reload(code)
        return self.find_one(code=code)

    def list_for_recipe(self, recipe_id: UUID) -> list[ShareCode]:
        return self.list(filters={"recipe_id": recipe_id})

    def increment_use(self, code: str, *, now: datetime) -> ShareCode | None:
        """
        Consume one use of ``code`` if, and only if, it is still redeemable.

        The validity checks (max uses, expiry) and the increment happen in one
        ``UPDATE`` statement, so two concurrent redemptions can never push
        ``use_count`` past ``max_uses``.

        :param code: Share code to consume.
        :param now: Reference time for the expiry check (UTC).
        :returns: The refreshed row, or ``None`` when no row qualified.
        """
        stmt = (
            update(ShareCode)
            .where(
                ShareCode.code == code,
                or_(ShareCode.max_uses.is_(None), ShareCode.use_count < ShareCode.max_uses),
                or_(ShareCode.expires_at.is_(None), ShareCode.expires_at >= now),
            )
            .values(use_count=ShareCode.use_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = cast(CursorResult[Any], self.session.execute(stmt))
        if result.rowcount != 1:
            return None
        return self._reload(code)

    def _reload(self, code: str) -> ShareCode | None:
        stmt = (
            select(ShareCode)
            .where(ShareCode.code == code)
            .execution_options(populate_existing=True)
        )
        return cast(ShareCode | None, self.session.execute(stmt).scalars().first())
