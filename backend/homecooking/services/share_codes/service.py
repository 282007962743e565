# homecooking/services/share_codes/service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime

from homecooking.models.recipe import Recipe
from homecooking.models.share_code import ShareCode
from homecooking.services._shared.base import BaseService, ServiceContext
from homecooking.services._shared.clock import as_utc
from homecooking.services._shared.codes import DEFAULT_CODE_BYTES, generate_code
from homecooking.services._shared.errors import (
    ExpiredError,
    InvalidInputError,
    MaxUsesReachedError,
    NotFoundError,
    RecipeNotFoundError,
    RecipeNotPublishedError,
)
from homecooking.services.share_codes.dto import (
    ShareCodeCreateIn,
    ShareCodeOut,
    ShareCodeWithRecipeOut,
    SharedRecipeOut,
)

logger = logging.getLogger(__name__)


def _to_out(sc: ShareCode) -> ShareCodeOut:
    return ShareCodeOut(
        id=sc.id,
        recipe_id=sc.recipe_id,
        code=sc.code,
        expires_at=as_utc(sc.expires_at),
        max_uses=sc.max_uses,
        use_count=sc.use_count,
        created_at=as_utc(sc.created_at),
    )


def _to_out_with_recipe(sc: ShareCode) -> ShareCodeWithRecipeOut:
    return ShareCodeWithRecipeOut(
        id=sc.id,
        recipe_id=sc.recipe_id,
        code=sc.code,
        expires_at=as_utc(sc.expires_at),
        max_uses=sc.max_uses,
        use_count=sc.use_count,
        created_at=as_utc(sc.created_at),
        recipe_title=sc.recipe.title,
        recipe_slug=sc.recipe.slug,
    )


def _to_recipe_out(recipe: Recipe) -> SharedRecipeOut:
    return SharedRecipeOut(
        id=recipe.id,
        title=recipe.title,
        slug=recipe.slug,
        description=recipe.description,
        published_at=as_utc(recipe.published_at),
    )


def ensure_redeemable(sc: ShareCode, now: datetime) -> None:
    """
    Apply the share-code validity checks in their fixed order.

    The use cap is checked before expiry, so a code that is both exhausted
    and expired reports :class:`MaxUsesReachedError`.

    :raises MaxUsesReachedError: When ``use_count`` reached ``max_uses``.
    :raises ExpiredError: When ``now`` is past ``expires_at``.
    """
    if sc.max_uses is not None and sc.use_count >= sc.max_uses:
        raise MaxUsesReachedError()
    expires_at = as_utc(sc.expires_at)
    if expires_at is not None and now > expires_at:
        raise ExpiredError("Share code")


class ShareCodeService(BaseService):
    """
    Issue and redeem recipe share codes.

    Whether the caller may share a given recipe is decided by the recipe
    layer before this service is invoked.
    """

    def __init__(
        self, *, code_bytes: int = DEFAULT_CODE_BYTES, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.code_bytes = code_bytes

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_share_code(self, dto: ShareCodeCreateIn) -> ShareCodeOut:
        """
        Issue a new code for a published recipe.

        :raises InvalidInputError: If ``max_uses`` is lower than 1.
        :raises RecipeNotFoundError: If the recipe does not exist.
        :raises RecipeNotPublishedError: If the recipe is still a draft.
        """
        if dto.max_uses is not None and dto.max_uses < 1:
            raise InvalidInputError("max_uses must be at least 1")

        with self.rw_uow() as uow:
            recipe = uow.recipes.get(dto.recipe_id)
            if recipe is None:
                raise RecipeNotFoundError("Recipe", dto.recipe_id)
            if not recipe.is_published:
                raise RecipeNotPublishedError()

            sc = uow.share_codes.add(
                ShareCode(
                    recipe_id=recipe.id,
                    code=generate_code(self.code_bytes),
                    expires_at=as_utc(dto.expires_at),
                    max_uses=dto.max_uses,
                    use_count=0,
                )
            )
            out = _to_out(sc)

        logger.info(
            "share_code.created",
            extra={"share_code_id": str(out.id), "recipe_id": str(out.recipe_id)},
        )
        return out

    def use_share_code(self, code: str) -> ShareCodeWithRecipeOut:
        """
        Consume one use of ``code``.

        Validation and increment are a single conditional ``UPDATE``; when
        it matches no row the code is re-read to report why.

        :returns: The share code after the increment.
        :raises NotFoundError: If the code does not exist.
        :raises MaxUsesReachedError: If the use cap is already reached.
        :raises ExpiredError: If the code is past its expiry.
        """
        now = self.now_utc()
        with self.rw_uow() as uow:
            sc = uow.share_codes.increment_use(code, now=now)
            if sc is None:
                current = uow.share_codes.get_by_code(code, fresh=True)
                if current is None:
                    raise NotFoundError("ShareCode", code)
                ensure_redeemable(current, now)
                # Row changed between the two statements.
                raise MaxUsesReachedError()
            out = _to_out_with_recipe(sc)

        logger.info(
            "share_code.used",
            extra={"share_code_id": str(out.id), "use_count": out.use_count},
        )
        return out

    def delete_share_code(self, share_code_id: uuid.UUID) -> None:
        """
        Delete a share code by id.

        :raises NotFoundError: If the share code does not exist.
        """
        with self.rw_uow() as uow:
            sc = uow.share_codes.get(share_code_id)
            if sc is None:
                raise NotFoundError("ShareCode", share_code_id)
            uow.share_codes.delete(sc)
        logger.info("share_code.deleted", extra={"share_code_id": str(share_code_id)})

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_share_code(self, code: str) -> ShareCodeWithRecipeOut:
        """
        Look up a code with the same validity checks as redemption.

        :raises NotFoundError: If the code does not exist.
        :raises MaxUsesReachedError: If the use cap is already reached.
        :raises ExpiredError: If the code is past its expiry.
        """
        with self.ro_uow() as uow:
            sc = uow.share_codes.get_by_code(code)
            if sc is None:
                raise NotFoundError("ShareCode", code)
            ensure_redeemable(sc, self.now_utc())
            return _to_out_with_recipe(sc)

    def access_recipe(self, code: str) -> SharedRecipeOut:
        """
        Redeem ``code`` and return the recipe it unlocks.

        :raises NotFoundError: If the code does not exist.
        :raises MaxUsesReachedError: If the use cap is already reached.
        :raises ExpiredError: If the code is past its expiry.
        """
        used = self.use_share_code(code)
        with self.ro_uow() as uow:
            recipe = uow.recipes.get(used.recipe_id)
            if recipe is None:
                raise RecipeNotFoundError("Recipe", used.recipe_id)
            return _to_recipe_out(recipe)

    def list_for_recipe(self, recipe_id: uuid.UUID) -> list[ShareCodeOut]:
        """Return all codes of a recipe, newest first."""
        with self.ro_uow() as uow:
            return [_to_out(sc) for sc in uow.share_codes.list_for_recipe(recipe_id)]
