from .dto import InviteCreateIn, InviteUseIn, UserInviteOut
from .service import UserInviteService

__all__ = ["InviteCreateIn", "InviteUseIn", "UserInviteOut", "UserInviteService"]
