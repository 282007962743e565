"""User repository: the credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from homecooking.models.user import Role, User
from homecooking.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on lookups and account creation. It NEVER handles
    tokens, only DB-level user management.
    """

    model = User

    def _sortable_fields(self):
        return {
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "role": User.role,
        }

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by exact (trimmed) email.

        :param email: Email address to search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.strip())
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Writes ----------------------------

    def create(self, *, email: str, password: str, role: Role = Role.USER) -> User:
        """Insert a new user; the model setter hashes ``password``.

        :raises sqlalchemy.exc.IntegrityError: On a duplicate email.
        """
        user = User(email=email, role=role)
        user.password = password
        return self.add(user)

    def set_role(self, user: User, role: Role) -> User:
        """Change a user's role and flush."""
        user.role = role
        self.flush()
        return user
