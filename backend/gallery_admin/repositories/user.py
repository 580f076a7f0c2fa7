"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from gallery_admin.models.user import Role, User, UserStatus
from gallery_admin.repositories.base import BaseRepository, Page, Pagination


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens. Only DB-level user management lives here.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "name": User.name,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "status": User.status,
            "role": User.role,
        }

    def _updatable_fields(self):
        # ``password`` goes through the hashing setter on the model
        return {
            "name",
            "email",
            "whatsapp",
            "watermark",
            "password",
            "activated_at",
            "remarks",
            "role",
        }

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``email`` and ``password`` match, else ``None``."""
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user

    def update_password(self, user: User, new_password: str) -> None:
        user.password = new_password  # invokes setter → hash
        self.flush()

    # ---------------------------- Admin listing ----------------------------

    def search(
        self,
        pagination: Pagination,
        *,
        status: UserStatus | None = None,
        role: Role | None = None,
        search: str | None = None,
        exclude_id: int | None = None,
    ) -> Page[User]:
        """Page through users for the admin table.

        ``search`` matches name, email or contact handle case-insensitively.
        ``exclude_id`` hides the caller from their own listing.
        """
        stmt = self._apply_equality_filters(select(User), {"status": status, "role": role})
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    User.name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.whatsapp.ilike(pattern),
                )
            )
        return self._paginate_stmt(stmt, pagination)
