"""Factory Boy definition for :class:`homecooking.models.user.User`."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from homecooking.models.user import Role, User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"
# Low-cost hash so factories stay fast; real accounts use the default method.
_DEFAULT_PASSWORD_HASH = generate_password_hash(DEFAULT_PASSWORD, method="pbkdf2:sha256:1000")


class UserFactory(BaseFactory):
    """
    Build persisted :class:`homecooking.models.user.User` instances.

    Notes
    -----
    - Every user logs in with :data:`DEFAULT_PASSWORD` unless ``password=``
      is passed, which goes through the hashing model setter.
    """

    class Meta:
        model = User

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    role = Role.USER
    password_hash = _DEFAULT_PASSWORD_HASH

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set a custom password using the model setter (ensures hashing)."""
        if extracted:
            obj.password = extracted


class AdminFactory(UserFactory):
    role = Role.ADMIN
