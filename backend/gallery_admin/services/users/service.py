"""
UserService
===========

Account management for administrators and for users themselves:

- Read a profile by id.
- Change one's own password.
- Admin listing with status/role filters and free-text search.
- Admin update, status transitions and deletion.

Notes
-----
- This service is framework-agnostic; it never returns HTTP concerns.
- Errors are expressed via domain exceptions from ``_shared.errors``.
- Read operations use ``ro_uow()``; write operations use ``rw_uow()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from gallery_admin.core.constants import Messages
from gallery_admin.models.user import Role, User, UserStatus
from gallery_admin.repositories.base import Page
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services._shared.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    violates,
)
from gallery_admin.services._shared.ports.token_index import HashedTokenIndex
from gallery_admin.services.users.dto import UserListIn, UserUpdateIn

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
ADMIN_LIST_SORT = ["-created_at"]


def parse_status(raw: str | None) -> UserStatus:
    try:
        return UserStatus(raw)
    except ValueError as exc:
        raise BadRequestError("Invalid status. Must be active, pending, or blocked") from exc


def parse_role(raw: str | None) -> Role:
    try:
        return Role(raw)
    except ValueError as exc:
        raise BadRequestError(Messages.INVALID_ROLE) from exc


class UserService(BaseService):
    """
    Application service for the ``User`` aggregate.

    :param token_index: When given, a deleted user's refresh tokens are dropped.
    """

    def __init__(
        self,
        *,
        token_index: HashedTokenIndex | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(clock=clock)
        self.token_index = token_index

    # --------------------------------------------------------------------- #
    # Self-service
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: int) -> User:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return user

    def change_password(self, user_id: int, password: str | None) -> None:
        """
        Replace the caller's password.

        :raises BadRequestError: Missing or shorter than six characters.
        """
        if not password:
            raise BadRequestError("Password is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError("Password must be at least 6 characters long")
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.update_password(user, password)
        logger.info("users.password_changed", extra={"user_id": user_id})

    # --------------------------------------------------------------------- #
    # Admin
    # --------------------------------------------------------------------- #

    def list_users(self, dto: UserListIn, *, actor_id: int) -> Page[User]:
        """
        Page through every user except the caller, newest first.

        :raises BadRequestError: On an unknown status or role filter.
        """
        status = parse_status(dto.status) if dto.status else None
        role = parse_role(dto.role) if dto.role else None
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit, sort=ADMIN_LIST_SORT)
        with self.ro_uow() as uow:
            return uow.users.search(
                pagination,
                status=status,
                role=role,
                search=dto.search,
                exclude_id=actor_id,
            )

    def update_user(self, user_id: int, dto: UserUpdateIn) -> User:
        """
        Apply a partial update.

        :raises NotFoundError: If the user does not exist.
        :raises ConflictError: If the new email belongs to someone else.
        """
        fields = dict(dto.fields)
        if "role" in fields and fields["role"] is not None:
            fields["role"] = parse_role(fields["role"])
        if "password" in fields and (
            not fields["password"] or len(fields["password"]) < MIN_PASSWORD_LENGTH
        ):
            raise BadRequestError("Password must be at least 6 characters long")

        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            new_email = fields.get("email")
            if new_email and new_email.strip().lower() != user.email:
                if uow.users.exists_by_email(new_email):
                    raise ConflictError("User", Messages.USER_EXISTS)

            try:
                uow.users.assign_updates(user, fields)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", Messages.USER_EXISTS) from exc
                raise
            except ValueError as exc:
                raise BadRequestError(str(exc)) from exc
        return user

    def set_status(self, user_id: int, raw_status: str | None, *, actor_id: int) -> User:
        """
        Move a user to ``active``, ``pending`` or ``blocked``.

        ``activated_at`` is stamped on the first activation only.

        :raises BadRequestError: Unknown status, or an admin blocking or
            suspending their own account.
        :raises NotFoundError: If the user does not exist.
        """
        status = parse_status(raw_status)
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if user.id == actor_id and status is not UserStatus.ACTIVE:
                raise BadRequestError("You cannot block or pending your own account")
            if status is UserStatus.ACTIVE:
                user.mark_active(self.now_utc())
            else:
                user.status = status
            uow.users.flush()
        logger.info("users.status_changed", extra={"user_id": user_id})
        return user

    def delete_user(self, user_id: int, *, actor_id: int) -> None:
        """
        Delete an account, its likes and its outstanding refresh tokens.

        :raises NotFoundError: If the user does not exist.
        :raises BadRequestError: When an admin targets their own account.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if user.id == actor_id:
                raise BadRequestError("You cannot delete your own account")
            uow.users.delete(user)

        if self.token_index is not None:
            revoked = self.token_index.revoke_all_for_user(user_id)
            logger.info("users.deleted", extra={"user_id": user_id, "revoked": revoked})
