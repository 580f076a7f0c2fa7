# gallery_admin/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from gallery_admin.repositories.base import Pagination
from gallery_admin.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (pagination/sorting).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services raise :class:`~gallery_admin.services._shared.errors.ServiceError`
      subclasses; ``core/errors.py`` turns them into responses.
    """

    MAX_PAGE_SIZE = 100

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size, capped at ``MAX_PAGE_SIZE``.
        :param sort: Sort tokens like ["-created_at", "name"].
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), self.MAX_PAGE_SIZE)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def now_utc(self) -> datetime:
        return self._clock()
