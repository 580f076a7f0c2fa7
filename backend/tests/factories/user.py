"""Factory Boy definition for :class:`gallery_admin.models.user.User`."""

from __future__ import annotations

import factory

from gallery_admin.models.user import Role, User, UserStatus
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`gallery_admin.models.user.User` instances.

    Notes
    -----
    - Accounts are ``pending`` users by default, as after registration.
    - Use :class:`AdminFactory` for an active administrator.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    whatsapp = factory.Sequence(lambda n: f"+3460000{n:04d}")
    watermark = factory.LazyAttribute(lambda o: o.name.split()[0])
    status = UserStatus.PENDING
    role = Role.USER
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        value = extracted or DEFAULT_PASSWORD
        obj.password = value


class AdminFactory(UserFactory):
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    status = UserStatus.ACTIVE
    role = Role.ADMIN
