"""HTTP tests for share code endpoints."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from tests.factories.recipe import RecipeFactory
from tests.factories.share_code import ShareCodeFactory
from tests.factories.user import UserFactory
from tests.helpers.auth import auth_headers

BASE = "/api/v1/share-codes"


class TestCreate:
    def test_requires_authentication(self, client, session):
        recipe = RecipeFactory()
        session.commit()

        resp = client.post(BASE, json={"recipe_id": str(recipe.id)})
        assert resp.status_code == 401

    def test_create(self, app, client, session):
        user = UserFactory()
        recipe = RecipeFactory()
        session.commit()

        resp = client.post(
            BASE,
            json={"recipe_id": str(recipe.id), "max_uses": 2},
            headers=auth_headers(app, user),
        )

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert len(data["code"]) == 16
        assert data["use_count"] == 0
        assert data["max_uses"] == 2

    def test_unpublished_recipe(self, app, client, session):
        user = UserFactory()
        draft = RecipeFactory(is_published=False)
        session.commit()

        resp = client.post(
            BASE, json={"recipe_id": str(draft.id)}, headers=auth_headers(app, user)
        )

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "recipe_not_published"

    def test_unknown_recipe(self, app, client, session):
        user = UserFactory()
        session.commit()

        resp = client.post(
            BASE, json={"recipe_id": str(uuid.uuid4())}, headers=auth_headers(app, user)
        )

        assert resp.status_code == 404
        assert resp.get_json()["code"] == "recipe_not_found"

    def test_max_uses_validated(self, app, client, session):
        user = UserFactory()
        recipe = RecipeFactory()
        session.commit()

        resp = client.post(
            BASE,
            json={"recipe_id": str(recipe.id), "max_uses": 0},
            headers=auth_headers(app, user),
        )
        assert resp.status_code == 422


class TestRedeem:
    def test_get_then_access(self, client, session):
        sc = ShareCodeFactory(max_uses=1)
        session.commit()

        peek = client.get(f"{BASE}/{sc.code}")
        assert peek.status_code == 200
        assert peek.get_json()["data"]["recipe_title"] == sc.recipe.title

        first = client.get(f"{BASE}/{sc.code}/recipe")
        assert first.status_code == 200
        assert first.get_json()["data"]["slug"] == sc.recipe.slug

        second = client.get(f"{BASE}/{sc.code}/recipe")
        assert second.status_code == 410
        assert second.get_json()["code"] == "max_uses_reached"

    def test_expired(self, client, session):
        sc = ShareCodeFactory(expires_at=datetime.now(UTC) - timedelta(minutes=1))
        session.commit()

        resp = client.get(f"{BASE}/{sc.code}")
        assert resp.status_code == 410
        assert resp.get_json()["code"] == "expired"

    def test_unknown_code(self, client):
        resp = client.get(f"{BASE}/ffffffffffffffff")
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "not_found"


class TestListAndDelete:
    def test_list_for_recipe(self, client, session):
        recipe = RecipeFactory()
        ShareCodeFactory(recipe=recipe)
        session.commit()

        resp = client.get(f"/api/v1/recipes/{recipe.id}/share-codes")

        assert resp.status_code == 200
        assert [item["recipe_id"] for item in resp.get_json()["data"]] == [str(recipe.id)]

    def test_delete(self, app, client, session):
        user = UserFactory()
        sc = ShareCodeFactory()
        session.commit()

        resp = client.delete(f"{BASE}/{sc.id}", headers=auth_headers(app, user))
        assert resp.status_code == 204
        assert client.get(f"{BASE}/{sc.code}").status_code == 404
