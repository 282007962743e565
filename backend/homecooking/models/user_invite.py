"""Single-use invitation model."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from homecooking.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin
from .user import Role, role_column_type


class UserInvite(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Invitation pre-authorizing one registration with a fixed role.

    ``used_at``/``used_by`` stay ``NULL`` until the invite is redeemed and are
    written exactly once.
    """

    __tablename__ = "user_invites"

    code: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    role: Mapped[Role] = mapped_column(
        role_column_type("invite_role"), nullable=False, default=Role.USER
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (UniqueConstraint("code", name="uq_user_invites_code"),)

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    @validates("role")
    def _coerce_role(self, key: str, value: Role | str) -> Role:
        return Role.parse(value)
