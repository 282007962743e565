# tests/unit/services/test_invite_service.py
from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime, timedelta

import pytest

from homecooking.models.user import Role
from homecooking.models.user_invite import UserInvite
from homecooking.services._shared.errors import (
    AlreadyUsedError,
    EmailAlreadyRegisteredError,
    ExpiredError,
    InvalidRoleError,
    NotFoundError,
)
from homecooking.services.invites import InviteCreateIn, InviteUseIn, UserInviteService
from homecooking.services.invites.service import ensure_redeemable
from tests.factories.user import AdminFactory, UserFactory
from tests.factories.user_invite import UserInviteFactory


@pytest.fixture()
def service() -> UserInviteService:
    return UserInviteService()


@pytest.fixture()
def admin(session):
    user = AdminFactory()
    session.commit()
    return user


# -------------------------------- Create ---------------------------------- #
class TestCreate:
    @pytest.mark.parametrize("role", [None, "", "  "])
    def test_blank_role_defaults_to_user(self, service, admin, role):
        out = service.create_invite(InviteCreateIn(created_by=admin.id, role=role))

        assert out.role is Role.USER
        assert re.fullmatch(r"[0-9a-f]{16}", out.code)
        assert out.used_at is None
        assert out.created_by == admin.id

    def test_admin_role_is_case_insensitive(self, service, admin):
        out = service.create_invite(InviteCreateIn(created_by=admin.id, role="ADMIN"))
        assert out.role is Role.ADMIN

    @pytest.mark.parametrize("role", ["superadmin", "owner", "root"])
    def test_unknown_role_rejected(self, service, admin, role):
        with pytest.raises(InvalidRoleError) as exc:
            service.create_invite(InviteCreateIn(created_by=admin.id, role=role))
        assert exc.value.code == "invalid_role"

    def test_email_is_trimmed(self, service, admin):
        out = service.create_invite(
            InviteCreateIn(created_by=admin.id, email="  friend@example.com ")
        )
        assert out.email == "friend@example.com"

    def test_blank_email_means_open_invite(self, service, admin):
        out = service.create_invite(InviteCreateIn(created_by=admin.id, email="   "))
        assert out.email is None


# ---------------------------------- Use ----------------------------------- #
class TestUse:
    def test_use_twice(self, service, session):
        invite = UserInviteFactory()
        redeemer = UserFactory()
        session.commit()

        first = service.use_invite(InviteUseIn(code=invite.code, used_by=redeemer.id))
        assert first.used_at is not None
        assert first.used_by == redeemer.id

        with pytest.raises(AlreadyUsedError) as exc:
            service.use_invite(InviteUseIn(code=invite.code, used_by=uuid.uuid4()))
        assert exc.value.code == "already_used"

    def test_get_after_use_fails_closed(self, service, session):
        invite = UserInviteFactory()
        session.commit()

        service.use_invite(InviteUseIn(code=invite.code, used_by=uuid.uuid4()))
        with pytest.raises(AlreadyUsedError):
            service.get_invite(invite.code)

    def test_expired(self, service, session):
        invite = UserInviteFactory(expires_at=datetime.now(UTC) - timedelta(minutes=5))
        session.commit()

        with pytest.raises(ExpiredError):
            service.get_invite(invite.code)
        with pytest.raises(ExpiredError):
            service.use_invite(InviteUseIn(code=invite.code, used_by=uuid.uuid4()))

    def test_used_checked_before_expired(self, service, session):
        past = datetime.now(UTC) - timedelta(days=1)
        invite = UserInviteFactory(expires_at=past, used_at=past, used_by=None)
        session.commit()

        with pytest.raises(AlreadyUsedError):
            service.get_invite(invite.code)

    def test_target_email_already_registered(self, service, session):
        existing = UserFactory(email="target@example.com")
        invite = UserInviteFactory(email="target@example.com")
        session.commit()

        with pytest.raises(EmailAlreadyRegisteredError):
            service.use_invite(InviteUseIn(code=invite.code, used_by=existing.id))

        # The rejected redemption leaves the invite untouched.
        assert service.get_invite(invite.code).used_at is None

    def test_unknown_code(self, service):
        with pytest.raises(NotFoundError):
            service.use_invite(InviteUseIn(code="nope", used_by=uuid.uuid4()))
        with pytest.raises(NotFoundError):
            service.get_invite("nope")


# ----------------------------- List / delete ------------------------------ #
class TestListAndDelete:
    def test_list_newest_first(self, service, session):
        base = datetime(2024, 1, 1, tzinfo=UTC)
        older = UserInviteFactory(created_at=base)
        newer = UserInviteFactory(created_at=base + timedelta(minutes=1))
        session.commit()

        ids = [i.id for i in service.list_invites()]
        assert ids.index(newer.id) < ids.index(older.id)

    def test_delete(self, service, session):
        invite = UserInviteFactory()
        session.commit()

        service.delete_invite(invite.id)
        with pytest.raises(NotFoundError):
            service.get_invite(invite.code)

    def test_delete_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.delete_invite(uuid.uuid4())


class TestEnsureRedeemable:
    NOW = datetime(2030, 1, 1, tzinfo=UTC)

    def test_open_invite_passes(self):
        ensure_redeemable(UserInvite(code="abc", role=Role.USER), self.NOW)

    def test_used_invite_rejected(self):
        invite = UserInvite(code="abc", role=Role.USER, used_at=self.NOW - timedelta(days=1))
        with pytest.raises(AlreadyUsedError):
            ensure_redeemable(invite, self.NOW)

    def test_past_expiry_rejected(self):
        invite = UserInvite(
            code="abc", role=Role.USER, expires_at=self.NOW - timedelta(seconds=1)
        )
        with pytest.raises(ExpiredError):
            ensure_redeemable(invite, self.NOW)
