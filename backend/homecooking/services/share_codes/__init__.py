from .dto import ShareCodeCreateIn, ShareCodeOut, ShareCodeWithRecipeOut, SharedRecipeOut
from .service import ShareCodeService

__all__ = [
    "ShareCodeCreateIn",
    "ShareCodeOut",
    "ShareCodeService",
    "ShareCodeWithRecipeOut",
    "SharedRecipeOut",
]
