"""Factory Boy definition for :class:`homecooking.models.recipe.Recipe`."""

from __future__ import annotations

from datetime import UTC, datetime

import factory

from homecooking.models.recipe import Recipe
from tests.factories import BaseFactory


class RecipeFactory(BaseFactory):
    """Published recipe by default; pass ``is_published=False`` for a draft."""

    class Meta:
        model = Recipe

    title = factory.Faker("sentence", nb_words=3)
    slug = factory.Sequence(lambda n: f"recipe-{n}")
    description = factory.Faker("paragraph")
    is_published = True
    published_at = factory.LazyAttribute(
        lambda o: datetime.now(UTC) if o.is_published else None
    )
