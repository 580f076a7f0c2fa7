# gallery_admin/services/dashboard/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DashboardStatsOut:
    total_users: int
    active_users: int
    pending_users: int
    blocked_users: int
    total_images: int
    total_likes: int
