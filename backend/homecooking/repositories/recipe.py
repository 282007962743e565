"""Read-side recipe lookups needed by share codes."""

from __future__ import annotations

from homecooking.models.recipe import Recipe
from homecooking.repositories.base import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    """Persistence-only repository for :class:`Recipe`."""

    model = Recipe

    def _filterable_fields(self):
        return {
            "slug": Recipe.slug,
            "author_id": Recipe.author_id,
            "is_published": Recipe.is_published,
        }
