# homecooking/services/invites/service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime

from homecooking.models.user import Role
from homecooking.models.user_invite import UserInvite
from homecooking.services._shared.base import BaseService, ServiceContext
from homecooking.services._shared.clock import as_utc
from homecooking.services._shared.codes import DEFAULT_CODE_BYTES, generate_code
from homecooking.services._shared.errors import (
    AlreadyUsedError,
    EmailAlreadyRegisteredError,
    ExpiredError,
    InvalidRoleError,
    NotFoundError,
)
from homecooking.services.invites.dto import InviteCreateIn, InviteUseIn, UserInviteOut

logger = logging.getLogger(__name__)


def _to_out(invite: UserInvite) -> UserInviteOut:
    return UserInviteOut(
        id=invite.id,
        code=invite.code,
        email=invite.email,
        role=Role.parse(invite.role),
        created_by=invite.created_by,
        expires_at=as_utc(invite.expires_at),
        used_at=as_utc(invite.used_at),
        used_by=invite.used_by,
        created_at=as_utc(invite.created_at),
    )


def ensure_redeemable(invite: UserInvite, now: datetime) -> None:
    """
    Fail closed on a used or expired invite (checked in that order).

    :raises AlreadyUsedError: When ``used_at`` is set.
    :raises ExpiredError: When ``now`` is past ``expires_at``.
    """
    if invite.is_used:
        raise AlreadyUsedError("UserInvite", "invite has already been used")
    expires_at = as_utc(invite.expires_at)
    if expires_at is not None and now > expires_at:
        raise ExpiredError("Invite")


class UserInviteService(BaseService):
    """
    Issue and redeem single-use registration invites.

    Admin-only operations (listing, deletion) are authorized at the HTTP
    boundary; this service does not re-check the caller's role.
    """

    def __init__(
        self, *, code_bytes: int = DEFAULT_CODE_BYTES, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.code_bytes = code_bytes

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_invite(self, dto: InviteCreateIn) -> UserInviteOut:
        """
        Issue an invite granting ``dto.role``.

        :raises InvalidRoleError: If the role is neither ``user`` nor ``admin``.
        """
        try:
            role = Role.parse(dto.role, default=Role.USER)
        except ValueError as exc:
            raise InvalidRoleError(dto.role) from exc

        email = (dto.email or "").strip() or None
        with self.rw_uow() as uow:
            invite = uow.invites.add(
                UserInvite(
                    code=generate_code(self.code_bytes),
                    email=email,
                    role=role,
                    created_by=dto.created_by,
                    expires_at=as_utc(dto.expires_at),
                )
            )
            out = _to_out(invite)

        logger.info(
            "invite.created",
            extra={
                "invite_id": str(out.id),
                "role": out.role.value,
                "created_by": str(out.created_by),
            },
        )
        return out

    def use_invite(self, dto: InviteUseIn) -> UserInviteOut:
        """
        Redeem an invite exactly once.

        :raises NotFoundError: If the code does not exist.
        :raises AlreadyUsedError: If the invite was already redeemed.
        :raises ExpiredError: If the invite is past its expiry.
        :raises EmailAlreadyRegisteredError: If the invite targets an email
            that already belongs to an account.
        """
        now = self.now_utc()
        with self.rw_uow() as uow:
            invite = uow.invites.get_by_code(dto.code)
            if invite is None:
                raise NotFoundError("UserInvite", dto.code)
            ensure_redeemable(invite, now)
            if invite.email and uow.users.exists_by_email(invite.email):
                raise EmailAlreadyRegisteredError("UserInvite", "email is already registered")

            redeemed = uow.invites.mark_used(dto.code, used_by=dto.used_by, now=now)
            if redeemed is None:
                # Lost the race to a concurrent redemption; re-read for the reason.
                current = uow.invites.get_by_code(dto.code, fresh=True)
                if current is None:
                    raise NotFoundError("UserInvite", dto.code)
                ensure_redeemable(current, now)
                raise AlreadyUsedError("UserInvite", "invite has already been used")
            out = _to_out(redeemed)

        logger.info(
            "invite.used",
            extra={"invite_id": str(out.id), "used_by": str(out.used_by)},
        )
        return out

    def delete_invite(self, invite_id: uuid.UUID) -> None:
        """
        Delete an invite by id.

        :raises NotFoundError: If the invite does not exist.
        """
        with self.rw_uow() as uow:
            invite = uow.invites.get(invite_id)
            if invite is None:
                raise NotFoundError("UserInvite", invite_id)
            uow.invites.delete(invite)
        logger.info("invite.deleted", extra={"invite_id": str(invite_id)})

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_invite(self, code: str) -> UserInviteOut:
        """
        Look up a redeemable invite.

        :raises NotFoundError: If the code does not exist.
        :raises AlreadyUsedError: If the invite was already redeemed.
        :raises ExpiredError: If the invite is past its expiry.
        """
        with self.ro_uow() as uow:
            invite = uow.invites.get_by_code(code)
            if invite is None:
                raise NotFoundError("UserInvite", code)
            ensure_redeemable(invite, self.now_utc())
            return _to_out(invite)

    def list_invites(self) -> list[UserInviteOut]:
        """Return every invite, newest first."""
        with self.ro_uow() as uow:
            return [_to_out(invite) for invite in uow.invites.list()]
