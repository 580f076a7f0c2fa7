# gallery_admin/services/dashboard/service.py
from __future__ import annotations

from gallery_admin.models.user import Role, UserStatus
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services.dashboard.dto import DashboardStatsOut


class DashboardService(BaseService):
    """Aggregate counters for the admin landing page. Admin accounts are not counted as users."""

    def stats(self) -> DashboardStatsOut:
        with self.ro_uow() as uow:
            return DashboardStatsOut(
                total_users=uow.users.count(role=Role.USER),
                active_users=uow.users.count(role=Role.USER, status=UserStatus.ACTIVE),
                pending_users=uow.users.count(role=Role.USER, status=UserStatus.PENDING),
                blocked_users=uow.users.count(role=Role.USER, status=UserStatus.BLOCKED),
                total_images=uow.images.count(),
                total_likes=uow.likes.count(),
            )
