"""Minimal recipe record consumed by share codes."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from homecooking.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Recipe(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Recipe as seen by the sharing subsystem.

    Authoring (markdown body, images, categories, tags) is owned by the recipe
    module; only the columns needed to validate and summarize a share live
    here.
    """

    __tablename__ = "recipes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (UniqueConstraint("slug", name="uq_recipes_slug"),)
