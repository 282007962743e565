"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They are the stable, typed contract between repositories,
services and the API boundary: callers branch on the class (or on the
``code`` attribute), never on the message text.

The translation to HTTP responses (RFC 7807) is handled by
``homecooking/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.

    Notes
    -----
    PostgreSQL reports the constraint name; SQLite only reports the column
    (``UNIQUE constraint failed: users.email``), so the ``uq_<table>_<column>``
    naming convention is also matched against ``<table>.<column>``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return bool(column) and f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``code`` is a stable, machine-readable identifier surfaced to clients.
    """

    code = "bad_request"
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidInputError(ServiceError):
    """Raised when a required input is missing or malformed."""

    code = "invalid_input"
    default_message = "Invalid input"


# --------------------------------------------------------------------------- #
# Lookup / conflict errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "ShareCode").
    :type entity: str
    :param key: Identifier or search key.
    :type key: object
    """

    entity: str
    key: object

    code = "not_found"

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class RecipeNotFoundError(NotFoundError):
    """Raised when a share code targets a recipe that does not exist."""

    code = "recipe_not_found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    code = "conflict"

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """Raised on registration when the email is already taken."""

    code = "duplicate_email"


class AlreadyUsedError(ConflictError):
    """Raised when a single-use invite has already been redeemed."""

    code = "already_used"


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an invite's target email already belongs to an account."""

    code = "email_already_registered"


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Base for failures that must be answered with ``401``."""

    code = "unauthorized"
    default_message = "Authentication required"


class InvalidCredentialsError(AuthenticationError):
    """
    Raised by login for an unknown email **and** for a wrong password.

    Both cases share one message so responses never reveal whether an
    account exists.
    """

    code = "invalid_credentials"
    default_message = "invalid credentials"


class InvalidTokenError(AuthenticationError):
    """Raised when an access or refresh token cannot be accepted."""

    code = "invalid_token"
    default_message = "invalid token"


class AuthorizationError(ServiceError):
    """Raised when the authenticated actor may not perform an action."""

    code = "forbidden"
    default_message = "You are not allowed to perform this action"


# --------------------------------------------------------------------------- #
# Ephemeral code validity
# --------------------------------------------------------------------------- #


class ExpiredError(ServiceError):
    """Raised when a share code or invite is past its expiry."""

    code = "expired"

    def __init__(self, entity: str = "Code") -> None:
        self.entity = entity
        super().__init__(f"{entity} has expired")


class MaxUsesReachedError(ServiceError):
    """Raised when a share code already reached ``max_uses``."""

    code = "max_uses_reached"
    default_message = "Share code has reached its maximum number of uses"


class RecipeNotPublishedError(ServiceError):
    """Raised when sharing a recipe that is still a draft."""

    code = "recipe_not_published"
    default_message = "Only published recipes can be shared"


class InvalidRoleError(ServiceError):
    """Raised when a role outside the closed ``Role`` enumeration is requested."""

    code = "invalid_role"

    def __init__(self, role: object) -> None:
        self.role = role
        super().__init__(f"Invalid role: {role!r}")
