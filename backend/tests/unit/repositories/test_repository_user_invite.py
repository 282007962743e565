"""Unit tests for UserInviteRepository's single-use transition."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from homecooking.repositories.user_invite import UserInviteRepository
from tests.factories.user import UserFactory
from tests.factories.user_invite import UserInviteFactory


@pytest.fixture()
def repo():
    return UserInviteRepository()


def test_mark_used_sets_fields_once(repo, session):
    invite = UserInviteFactory()
    user = UserFactory()
    session.commit()
    now = datetime.now(UTC)

    redeemed = repo.mark_used(invite.code, used_by=user.id, now=now)
    assert redeemed is not None
    assert redeemed.used_by == user.id
    assert redeemed.used_at is not None

    assert repo.mark_used(invite.code, used_by=uuid.uuid4(), now=now) is None
    assert repo.get_by_code(invite.code, fresh=True).used_by == user.id


def test_mark_used_refuses_expired(repo, session):
    now = datetime.now(UTC)
    invite = UserInviteFactory(expires_at=now - timedelta(seconds=1))
    session.commit()

    assert repo.mark_used(invite.code, used_by=uuid.uuid4(), now=now) is None
    assert repo.get_by_code(invite.code, fresh=True).used_at is None


def test_mark_used_unknown_code(repo):
    assert repo.mark_used("nope", used_by=uuid.uuid4(), now=datetime.now(UTC)) is None


def test_list_newest_first(repo, session):
    base = datetime(2024, 3, 1, tzinfo=UTC)
    first = UserInviteFactory(created_at=base)
    second = UserInviteFactory(created_at=base + timedelta(hours=1))
    session.commit()

    ids = [i.id for i in repo.list()]
    assert ids.index(second.id) < ids.index(first.id)
