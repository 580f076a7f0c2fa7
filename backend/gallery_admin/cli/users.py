"""Flask CLI commands for bootstrapping and maintaining accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from gallery_admin.api.deps import token_index
from gallery_admin.models.user import Role, User, UserStatus
from gallery_admin.services._shared.base import BaseService

LOGGER = logging.getLogger(__name__)


class _AccountAdmin(BaseService):
    """Thin wrapper so CLI writes share the service transaction rules."""

    def create_admin(self, *, email: str, name: str, password: str) -> tuple[User, bool]:
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(email)
            created = user is None
            if user is None:
                user = User(email=email, name=name, whatsapp="", watermark="")
                user.password = password
                uow.users.add(user)
            user.role = Role.ADMIN
            user.mark_active(self.now_utc())
            uow.users.flush()
        return user, created


@click.group("users")
def users_cli() -> None:
    """Account maintenance commands."""


@users_cli.command("create-admin")
@click.option("--email", required=True, help="Login email of the admin.")
@click.option("--name", default="Administrator", show_default=True)
@click.password_option(help="Password for a new account (ignored when the email exists).")
@with_appcontext
def create_admin_command(email: str, name: str, password: str) -> None:
    """Create an active admin, or promote an existing account to admin."""
    if len(password) < 6:
        raise click.BadParameter("Password must be at least 6 characters long", param_hint="password")
    try:
        user, created = _AccountAdmin().create_admin(email=email, name=name, password=password)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    verb = "Created" if created else "Promoted"
    LOGGER.info("cli.create_admin", extra={"user_id": user.id})
    click.echo(f"{verb} admin {user.email} (id={user.id}, status={UserStatus.ACTIVE.value})")


@users_cli.command("revoke-sessions")
@click.argument("user_id", type=int)
@with_appcontext
def revoke_sessions_command(user_id: int) -> None:
    """Drop every outstanding refresh token of USER_ID."""
    revoked = token_index().revoke_all_for_user(user_id)
    click.echo(f"Revoked {revoked} refresh token(s) for user {user_id}")
