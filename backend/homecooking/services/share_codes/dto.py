# homecooking/services/share_codes/dto.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ShareCodeCreateIn:
    """
    Input DTO for issuing a share code.

    :param recipe_id: Published recipe to share.
    :type recipe_id: uuid.UUID
    :param expires_at: Optional expiry (naive values are read as UTC).
    :type expires_at: datetime | None
    :param max_uses: Optional redemption cap (``>= 1``).
    :type max_uses: int | None
    """

    recipe_id: uuid.UUID
    expires_at: datetime | None = None
    max_uses: int | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ShareCodeOut:
    id: uuid.UUID
    recipe_id: uuid.UUID
    code: str
    expires_at: datetime | None
    max_uses: int | None
    use_count: int
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class ShareCodeWithRecipeOut(ShareCodeOut):
    """Share code plus the summary of the recipe it unlocks."""

    recipe_title: str
    recipe_slug: str


@dataclass(frozen=True, slots=True)
class SharedRecipeOut:
    """Recipe payload returned to anonymous holders of a share code."""

    id: uuid.UUID
    title: str
    slug: str
    description: str | None
    published_at: datetime | None
