"""Reusable SQLAlchemy mixins shared by domain models (typed 2.0)."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column


class CreatedAtMixin:
    """Provide an immutable ``created_at`` column.

    Attributes
    ----------
    created_at:
        Timezone-aware timestamp filled by the database on insert.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class TimestampMixin(CreatedAtMixin):
    """Provide ``created_at`` and ``updated_at`` timestamp columns.

    Attributes
    ----------
    updated_at:
        Timezone-aware timestamp refreshed by the database on update.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class PKMixin:
    """Expose an opaque UUID primary key column named ``id``.

    Attributes
    ----------
    id:
        Random UUID generated client-side on insert; never reused.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        """Return a short and useful string representation.

        :returns: Debug-friendly ``<ClassName id=...>``.
        :rtype: str
        """
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
