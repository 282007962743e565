"""Share code model granting limited anonymous access to one recipe."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homecooking.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin
from .recipe import Recipe


class ShareCode(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Random code resolving to a published recipe.

    Fields
    ------
    recipe_id : uuid.UUID
        Shared recipe (many codes per recipe; deleted with the recipe).
    code : str
        Lowercase hex lookup key, globally unique.
    expires_at : datetime | None
        After this instant the code is invalid regardless of ``use_count``.
    max_uses : int | None
        Upper bound for ``use_count`` (unbounded when ``None``).
    use_count : int
        Successful redemptions so far; only ever incremented.
    """

    __tablename__ = "share_codes"

    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    use_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    recipe: Mapped[Recipe] = relationship(Recipe, lazy="joined")

    __table_args__ = (
        UniqueConstraint("code", name="uq_share_codes_code"),
        CheckConstraint("use_count >= 0", name="use_count_non_negative"),
        CheckConstraint("max_uses IS NULL OR max_uses >= 1", name="max_uses_positive"),
        Index("ix_share_codes_recipe_id", "recipe_id"),
    )
