"""HTTP tests for invite endpoints."""

from __future__ import annotations

from tests.factories.user import AdminFactory, UserFactory
from tests.factories.user_invite import UserInviteFactory
from tests.helpers.auth import auth_headers

BASE = "/api/v1/invites"


def test_create_invite_defaults_role(app, client, session):
    inviter = UserFactory()
    session.commit()

    resp = client.post(
        BASE, json={"email": "friend@example.com"}, headers=auth_headers(app, inviter)
    )

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["role"] == "user"
    assert data["created_by"] == str(inviter.id)
    assert data["used_at"] is None


def test_create_invite_rejects_unknown_role(app, client, session):
    inviter = UserFactory()
    session.commit()

    resp = client.post(BASE, json={"role": "superadmin"}, headers=auth_headers(app, inviter))

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_role"


def test_use_invite_once(app, client, session):
    invite = UserInviteFactory()
    user = UserFactory()
    session.commit()
    headers = auth_headers(app, user)

    first = client.post(f"{BASE}/use", json={"code": invite.code}, headers=headers)
    assert first.status_code == 200
    assert first.get_json()["data"]["used_by"] == str(user.id)

    second = client.post(f"{BASE}/use", json={"code": invite.code}, headers=headers)
    assert second.status_code == 409
    assert second.get_json()["code"] == "already_used"


def test_use_invite_requires_code(app, client, session):
    user = UserFactory()
    session.commit()

    resp = client.post(f"{BASE}/use", json={"code": "  "}, headers=auth_headers(app, user))
    assert resp.status_code == 422


def test_get_invite(client, session):
    invite = UserInviteFactory(email="target@example.com")
    session.commit()

    resp = client.get(f"{BASE}/{invite.code}")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["email"] == "target@example.com"


def test_listing_is_admin_only(app, client, session):
    user = UserFactory()
    admin = AdminFactory()
    UserInviteFactory()
    session.commit()

    assert client.get(BASE, headers=auth_headers(app, user)).status_code == 403

    resp = client.get(BASE, headers=auth_headers(app, admin))
    assert resp.status_code == 200
    assert len(resp.get_json()["data"]) >= 1


def test_delete_is_admin_only(app, client, session):
    user = UserFactory()
    admin = AdminFactory()
    invite = UserInviteFactory()
    session.commit()

    forbidden = client.delete(f"{BASE}/{invite.id}", headers=auth_headers(app, user))
    assert forbidden.status_code == 403

    deleted = client.delete(f"{BASE}/{invite.id}", headers=auth_headers(app, admin))
    assert deleted.status_code == 204
    assert client.get(f"{BASE}/{invite.code}").status_code == 404
