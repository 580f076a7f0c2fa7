# gallery_admin/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserListIn:
    """
    Admin listing filters.

    :param page: 1-based page number.
    :param limit: Page size.
    :param status: Raw status filter (validated by the service).
    :param role: Raw role filter (validated by the service).
    :param search: Case-insensitive fragment of name, email or contact.
    """

    page: int = 1
    limit: int = 10
    status: str | None = None
    role: str | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial admin update. Only keys present in ``fields`` are applied.

    Allowed keys: ``name``, ``email``, ``whatsapp``, ``watermark``,
    ``password``, ``activated_at``, ``remarks`` and ``role``.
    Status changes go through :meth:`UserService.set_status`.
    """

    fields: dict[str, Any] = field(default_factory=dict)
