"""User model and the closed role enumeration."""

from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from homecooking.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Role(str, Enum):
    """Closed set of account roles.

    Every code path that assigns a role (model, invites, tokens) goes through
    :meth:`parse`, so an unknown string can never be persisted.
    """

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Role | str | None, *, default: Role | None = None) -> Role:
        """
        Coerce ``value`` into a :class:`Role`.

        :param value: Role instance or raw string (case-insensitive, trimmed).
        :param default: Returned when ``value`` is ``None`` or blank.
        :raises ValueError: If ``value`` is not a known role.
        """
        if isinstance(value, cls):
            return value
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Unknown role: {value!r}")
        raw = (value or "").strip().lower()
        if not raw and default is not None:
            return default
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None


def role_column_type(name: str) -> SAEnum:
    """Build the non-native enum column type used wherever a role is stored."""
    return SAEnum(
        Role,
        name=name,
        native_enum=False,
        length=16,
        values_callable=lambda enum: [member.value for member in enum],
        validate_strings=True,
    )


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity.

    Fields
    ------
    email : str
        Login email. Stored trimmed; comparisons are case-sensitive.
    password_hash : str
        Salted one-way hash (write-only setter via ``password``).
    role : Role
        Account role, ``Role.USER`` unless promoted or invited as admin.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        role_column_type("user_role"), nullable=False, default=Role.USER
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Trim and sanity-check the email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("role")
    def _coerce_role(self, key: str, value: Role | str) -> Role:
        """Reject any role outside :class:`Role`."""
        return Role.parse(value)
