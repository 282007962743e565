"""Flask CLI commands for bootstrapping and administering accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import IntegrityError

from homecooking.models.user import Role
from homecooking.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Account administration commands."""


@users_cli.command("create-admin")
@click.argument("email")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new administrator.",
)
@with_appcontext
def create_admin(email: str, password: str) -> None:
    """Create an administrator account (used to issue the first invites)."""
    if not password:
        raise click.BadParameter("Password must not be empty.", param_hint="--password")
    try:
        with SQLAlchemyUnitOfWork() as uow:
            if uow.users.exists_by_email(email):
                raise click.ClickException(f"A user with email {email!r} already exists.")
            user = uow.users.create(email=email, password=password, role=Role.ADMIN)
            user_id = user.id
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="EMAIL") from exc
    except IntegrityError as exc:
        raise click.ClickException(f"A user with email {email!r} already exists.") from exc

    LOGGER.info("user.admin_created", extra={"user_id": str(user_id)})
    click.echo(f"Created admin {email} ({user_id}).")


@users_cli.command("set-role")
@click.argument("email")
@click.argument("role", type=click.Choice([r.value for r in Role], case_sensitive=False))
@with_appcontext
def set_role(email: str, role: str) -> None:
    """Change the role of an existing account."""
    new_role = Role.parse(role)
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_email(email)
        if user is None:
            raise click.ClickException(f"No user with email {email!r}.")
        uow.users.set_role(user, new_role)
        user_id = user.id

    LOGGER.info("user.role_changed", extra={"user_id": str(user_id), "role": new_role.value})
    click.echo(f"{email} is now {new_role.value}.")
