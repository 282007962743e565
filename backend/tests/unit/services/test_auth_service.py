# tests/unit/services/test_auth_service.py
from __future__ import annotations

import logging
import uuid
from datetime import timedelta

import pytest

from homecooking.infra.jwt import JWTTokenCodec, TokenCodecConfig
from homecooking.models.user import Role
from homecooking.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
)
from homecooking.services._shared.ports import (
    InMemoryRefreshTokenRegistry,
    TokenKind,
    TokenSubject,
)
from homecooking.services.auth.dto import LoginIn, RefreshIn, RegisterIn, TokenPairOut
from homecooking.services.auth.service import AuthService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(
        TokenCodecConfig(
            access_secret="test-access",
            refresh_secret="test-refresh",
            access_ttl=timedelta(hours=2),
        )
    )


@pytest.fixture()
def service(codec) -> AuthService:
    """AuthService with the default (reusable) refresh tokens."""
    return AuthService(token_codec=codec)


@pytest.fixture()
def single_use_service(codec) -> AuthService:
    return AuthService(token_codec=codec, refresh_registry=InMemoryRefreshTokenRegistry())


# ------------------------------- Register --------------------------------- #
class TestRegister:
    def test_register_then_login(self, service):
        user = service.register(RegisterIn(email="new@example.com", password="hunter22"))
        assert user.role is Role.USER
        assert user.email == "new@example.com"

        pair = service.login(LoginIn(email="new@example.com", password="hunter22"))
        assert isinstance(pair, TokenPairOut)
        assert pair.expires_in == 2 * 3600
        assert pair.token_type == "Bearer"

    def test_register_trims_email(self, service):
        user = service.register(RegisterIn(email="  pad@example.com ", password="x"))
        assert user.email == "pad@example.com"

    def test_duplicate_email(self, service, session):
        UserFactory(email="taken@example.com")
        session.commit()

        with pytest.raises(DuplicateEmailError):
            service.register(RegisterIn(email="taken@example.com", password="x"))

    @pytest.mark.parametrize(
        ("email", "password"),
        [("", "x"), ("   ", "x"), ("a@example.com", ""), ("not-an-email", "x")],
    )
    def test_invalid_input(self, service, email, password):
        with pytest.raises(InvalidInputError):
            service.register(RegisterIn(email=email, password=password))


# -------------------------------- Login ----------------------------------- #
class TestLogin:
    def test_wrong_password_and_unknown_email_are_indistinguishable(self, service, session):
        user = UserFactory()
        session.commit()

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            service.login(LoginIn(email=user.email, password="wrong"))
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            service.login(LoginIn(email="ghost@example.com", password=DEFAULT_PASSWORD))

        assert type(wrong_password.value) is type(unknown_email.value)
        assert str(wrong_password.value) == str(unknown_email.value)
        assert wrong_password.value.code == unknown_email.value.code

    def test_email_match_is_case_sensitive(self, service, session):
        UserFactory(email="Case@example.com")
        session.commit()

        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email="case@example.com", password=DEFAULT_PASSWORD))

    def test_tokens_carry_current_role(self, service, codec, session):
        admin = UserFactory(role=Role.ADMIN)
        session.commit()

        pair = service.login(LoginIn(email=admin.email, password=DEFAULT_PASSWORD))
        claims = codec.verify(pair.access_token, TokenKind.ACCESS)
        assert claims.role is Role.ADMIN
        assert claims.user_id == admin.id

    def test_logs_failures_without_email(self, service, caplog):
        caplog.set_level(logging.INFO, logger="homecooking.services.auth.service")

        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email="ghost@example.com", password="x"))

        assert "auth.login_failed" in caplog.messages
        assert "ghost@example.com" not in caplog.text


# ------------------------------ Validate ---------------------------------- #
class TestValidateToken:
    def test_returns_current_user_row(self, service, session):
        user = UserFactory()
        session.commit()
        pair = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        user.role = Role.ADMIN
        session.commit()

        current = service.validate_token(pair.access_token)
        assert current.id == user.id
        assert current.role is Role.ADMIN

    def test_deleted_user_is_rejected(self, service, codec):
        ghost = TokenSubject(user_id=uuid.uuid4(), email="ghost@example.com", role=Role.USER)

        with pytest.raises(InvalidTokenError):
            service.validate_token(codec.issue_access_token(ghost))

    def test_refresh_token_is_not_an_access_token(self, service, session):
        user = UserFactory()
        session.commit()
        pair = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        with pytest.raises(InvalidTokenError):
            service.validate_token(pair.refresh_token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage_tokens(self, service, token):
        with pytest.raises(InvalidTokenError):
            service.validate_token(token)


# ------------------------------- Refresh ---------------------------------- #
class TestRefresh:
    def test_refreshed_access_token_validates(self, service, session):
        user = UserFactory()
        session.commit()
        pair = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        fresh = service.refresh(RefreshIn(refresh_token=pair.refresh_token))

        assert fresh.refresh_token != pair.refresh_token
        assert service.validate_token(fresh.access_token).id == user.id

    def test_access_token_cannot_refresh(self, service, session):
        user = UserFactory()
        session.commit()
        pair = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=pair.access_token))

    def test_old_refresh_token_stays_valid_by_default(self, service, session):
        user = UserFactory()
        session.commit()
        pair = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        service.refresh(RefreshIn(refresh_token=pair.refresh_token))
        again = service.refresh(RefreshIn(refresh_token=pair.refresh_token))
        assert again.access_token

    def test_single_use_mode_rejects_replay(self, single_use_service, session, caplog):
        caplog.set_level(logging.WARNING, logger="homecooking.services.auth.service")
        user = UserFactory()
        session.commit()
        pair = single_use_service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

        rotated = single_use_service.refresh(RefreshIn(refresh_token=pair.refresh_token))
        with pytest.raises(InvalidTokenError):
            single_use_service.refresh(RefreshIn(refresh_token=pair.refresh_token))

        assert "auth.refresh_reused" in caplog.messages
        # The rotated token is still good exactly once.
        assert single_use_service.refresh(RefreshIn(refresh_token=rotated.refresh_token))

    def test_refresh_for_missing_user(self, service, codec):
        ghost = TokenSubject(user_id=uuid.uuid4(), email="ghost@example.com", role=Role.USER)

        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=codec.issue_refresh_token(ghost)))


def test_get_current_user_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_current_user(uuid.uuid4())
