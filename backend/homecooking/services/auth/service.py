# homecooking/services/auth/service.py
from __future__ import annotations

import logging
import uuid
from functools import cache

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from homecooking.models.user import Role, User
from homecooking.repositories.user import UserRepository
from homecooking.services._shared.base import BaseService, ServiceContext
from homecooking.services._shared.clock import as_utc
from homecooking.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    violates,
)
from homecooking.services._shared.ports import (
    RefreshTokenRegistry,
    TokenClaims,
    TokenCodec,
    TokenError,
    TokenKind,
    TokenSubject,
)
from homecooking.services.auth.dto import (
    LoginIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
    UserOut,
)

logger = logging.getLogger(__name__)


@cache
def _dummy_password_hash() -> str:
    """Hash checked for unknown emails so both login failures cost the same."""
    return generate_password_hash(uuid.uuid4().hex)


def to_user_out(user: User) -> UserOut:
    """Map a ``User`` row to its public DTO."""
    return UserOut(
        id=user.id,
        email=user.email,
        role=Role.parse(user.role),
        created_at=as_utc(user.created_at),
    )


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / validate / refresh).

    Tokens are issued and verified through the injected :class:`TokenCodec`;
    the service itself never reads secrets or lifetimes from global config.

    Refresh tokens are *not* invalidated when exchanged unless a
    :class:`RefreshTokenRegistry` is supplied, in which case each refresh
    token can be exchanged exactly once.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        refresh_registry: RefreshTokenRegistry | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Adapter for issuing/verifying tokens.
        :param refresh_registry: Optional single-use tracker for refresh tokens.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_codec
        self.refresh_registry = refresh_registry

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserOut:
        """
        Create a ``user``-role account.

        :raises InvalidInputError: On a blank/malformed email or empty password.
        :raises DuplicateEmailError: If the email is already registered.
        """
        email = (dto.email or "").strip()
        if not email or not dto.password:
            raise InvalidInputError("Email and password are required")

        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_email(email):
                    raise DuplicateEmailError("User", "email already registered")
                try:
                    user = repo.create(email=email, password=dto.password, role=Role.USER)
                except ValueError as exc:
                    raise InvalidInputError(str(exc)) from exc
                out = to_user_out(user)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration for the same email.
            if violates(exc, "uq_users_email"):
                raise DuplicateEmailError("User", "email already registered") from exc
            raise

        logger.info("user.registered", extra={"user_id": str(out.id)})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Unknown email and wrong password raise the very same error.

        :raises InvalidCredentialsError: If credentials are invalid.
        """
        email = (dto.email or "").strip()
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(email) if email else None
            if user is None:
                check_password_hash(_dummy_password_hash(), dto.password or "")
                ok = False
            else:
                ok = user.verify_password(dto.password or "")
            subject = self._subject(user) if ok and user is not None else None

        if subject is None:
            logger.info("auth.login_failed")
            raise InvalidCredentialsError()

        logger.info("auth.login", extra={"user_id": str(subject.user_id)})
        return self._issue_pair(subject)

    # ------------------------------------------------------------------ #
    # Validate
    # ------------------------------------------------------------------ #

    def validate_token(self, token: str) -> UserOut:
        """
        Resolve an access token to the *current* user row.

        Role or email changes made after issuance are therefore visible
        immediately.

        :raises InvalidTokenError: On any verification failure or when the
            user no longer exists.
        """
        claims = self._verify(token, TokenKind.ACCESS)
        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
            if user is None:
                raise InvalidTokenError()
            return to_user_out(user)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a refresh token for a new access/refresh pair.

        :raises InvalidTokenError: If the token does not verify as a refresh
            token, its user is gone, or (single-use mode) it was already used.
        """
        claims = self._verify(dto.refresh_token, TokenKind.REFRESH)
        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
            if user is None:
                raise InvalidTokenError()
            subject = self._subject(user)

        if self.refresh_registry is not None and not self.refresh_registry.consume(
            claims.jti, expires_at=claims.expires_at
        ):
            logger.warning("auth.refresh_reused", extra={"user_id": str(claims.user_id)})
            raise InvalidTokenError("refresh token already used")

        return self._issue_pair(subject)

    # ------------------------------------------------------------------ #
    # Current user
    # ------------------------------------------------------------------ #

    def get_current_user(self, user_id: uuid.UUID) -> UserOut:
        """
        Fetch a user by id.

        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_user_out(user)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _verify(self, token: str, kind: TokenKind) -> TokenClaims:
        try:
            return self.tokens.verify(token, kind)
        except TokenError as exc:
            raise InvalidTokenError() from exc

    @staticmethod
    def _subject(user: User) -> TokenSubject:
        return TokenSubject(user_id=user.id, email=user.email, role=Role.parse(user.role))

    def _issue_pair(self, subject: TokenSubject) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.issue_access_token(subject),
            refresh_token=self.tokens.issue_refresh_token(subject),
            expires_in=self.tokens.access_lifetime_seconds,
        )
