"""Transaction boundary contract shared by the service layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gallery_admin.repositories import (
        ImageRepository,
        LikeRepository,
        SocialMediaRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    One use-case's view of the gallery store.

    All four repositories share one transaction. Implementations decide what
    leaving the ``with`` block means: the read-write variant commits or rolls
    back, the read-only one only drops its flush guard.
    """

    users: UserRepository
    images: ImageRepository
    likes: LikeRepository
    social_media: SocialMediaRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
