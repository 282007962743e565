from .dto import LoginIn, RefreshIn, RegisterIn, TokenPairOut, UserOut
from .service import AuthService

__all__ = ["AuthService", "LoginIn", "RefreshIn", "RegisterIn", "TokenPairOut", "UserOut"]
