from homecooking.models.recipe import Recipe
from homecooking.models.share_code import ShareCode
from homecooking.models.user import Role, User
from homecooking.models.user_invite import UserInvite

__all__ = [
    "Recipe",
    "Role",
    "ShareCode",
    "User",
    "UserInvite",
]
