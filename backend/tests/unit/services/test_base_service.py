# tests/unit/services/test_base_service.py
from __future__ import annotations

import pytest

from homecooking.core.errors import APIError
from homecooking.services._shared.base import BaseService
from homecooking.services._shared.errors import (
    AlreadyUsedError,
    AuthorizationError,
    DuplicateEmailError,
    EmailAlreadyRegisteredError,
    ExpiredError,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidRoleError,
    InvalidTokenError,
    MaxUsesReachedError,
    NotFoundError,
    RecipeNotFoundError,
    RecipeNotPublishedError,
)


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (NotFoundError("ShareCode", "abc"), 404, "not_found"),
        (RecipeNotFoundError("Recipe", "r1"), 404, "recipe_not_found"),
        (DuplicateEmailError("User", "taken"), 409, "duplicate_email"),
        (AlreadyUsedError("UserInvite", "used"), 409, "already_used"),
        (EmailAlreadyRegisteredError("UserInvite", "taken"), 409, "email_already_registered"),
        (InvalidCredentialsError(), 401, "invalid_credentials"),
        (InvalidTokenError(), 401, "invalid_token"),
        (AuthorizationError(), 403, "forbidden"),
        (ExpiredError("Invite"), 410, "expired"),
        (MaxUsesReachedError(), 410, "max_uses_reached"),
        (RecipeNotPublishedError(), 400, "recipe_not_published"),
        (InvalidRoleError("superadmin"), 400, "invalid_role"),
        (InvalidInputError(), 400, "invalid_input"),
    ],
)
def test_translate_exceptions(exc, status, code):
    translated = BaseService.translate_exceptions(exc)

    assert isinstance(translated, APIError)
    assert translated.status_code == status
    assert translated.code == code
    assert translated.message == str(exc)


def test_non_service_errors_pass_through():
    boom = RuntimeError("boom")
    assert BaseService.translate_exceptions(boom) is boom


def test_invalid_credentials_message_is_generic():
    assert str(InvalidCredentialsError()) == "invalid credentials"

