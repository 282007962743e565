# homecooking/services/invites/dto.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from homecooking.models.user import Role


@dataclass(frozen=True, slots=True)
class InviteCreateIn:
    """
    Input DTO for issuing an invite.

    :param email: Optional target email; redemption fails once it is registered.
    :type email: str | None
    :param role: Role granted on redemption (blank means ``user``).
    :type role: str | Role | None
    :param created_by: Inviting user.
    :type created_by: uuid.UUID
    :param expires_at: Optional expiry (naive values are read as UTC).
    :type expires_at: datetime | None
    """

    created_by: uuid.UUID
    email: str | None = None
    role: str | Role | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class InviteUseIn:
    code: str
    used_by: uuid.UUID


@dataclass(frozen=True, slots=True)
class UserInviteOut:
    id: uuid.UUID
    code: str
    email: str | None
    role: Role
    created_by: uuid.UUID | None
    expires_at: datetime | None
    used_at: datetime | None
    used_by: uuid.UUID | None
    created_at: datetime | None
