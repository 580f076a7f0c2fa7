"""User model: identity, credentials, role and account status."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from gallery_admin.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .like import Like


class Role(str, Enum):
    """Closed set of account roles checked by the admin gate."""

    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Account lifecycle state managed by administrators."""

    PENDING = "pending"
    ACTIVE = "active"
    BLOCKED = "blocked"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account able to sign in to the gallery.

    Fields
    ------
    name : str | None
        Display name.
    email : str
        Login email. Stored normalized (lowercase, trimmed) so lookups are
        case-insensitive.
    whatsapp : str | None
        Contact handle.
    watermark : str | None
        Text the client stamps on images shown to this user.
    password_hash : str
        Salted hash (write-only setter via ``password``).
    status : UserStatus
        ``pending`` until an admin activates or blocks the account.
    role : Role
        ``user`` or ``admin``.
    activated_at : datetime | None
        First transition to ``active``; never reset afterwards.
    remarks : str
        Free-text admin notes.
    """

    __tablename__ = "users"

    # Columns
    name: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    whatsapp: Mapped[str | None] = mapped_column(String(32))
    watermark: Mapped[str | None] = mapped_column(String(120))
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(
            UserStatus,
            name="enum_user_status",
            values_callable=_enum_values,
            create_constraint=True,
        ),
        nullable=False,
        default=UserStatus.PENDING,
    )
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="enum_user_role", values_callable=_enum_values, create_constraint=True),
        nullable=False,
        default=Role.USER,
    )
    activated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_status", "status"),
        Index("ix_users_role", "role"),
    )

    # Relationships
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="user", cascade="all, delete-orphan"
    )

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
        Verify a password against the stored hash in constant time.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash or not raw:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def mark_active(self, now: datetime) -> None:
        """Activate the account, stamping ``activated_at`` only the first time."""
        self.status = UserStatus.ACTIVE
        if self.activated_at is None:
            self.activated_at = now

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v
