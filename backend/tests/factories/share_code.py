"""Factory Boy definition for :class:`homecooking.models.share_code.ShareCode`."""

from __future__ import annotations

import factory

from homecooking.models.share_code import ShareCode
from homecooking.services._shared.codes import generate_code
from tests.factories import BaseFactory
from tests.factories.recipe import RecipeFactory


class ShareCodeFactory(BaseFactory):
    class Meta:
        model = ShareCode

    recipe = factory.SubFactory(RecipeFactory)
    code = factory.LazyFunction(generate_code)
    expires_at = None
    max_uses = None
    use_count = 0
