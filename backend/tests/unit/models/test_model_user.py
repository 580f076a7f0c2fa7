"""Unit tests for the User model."""

from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from gallery_admin.models.user import Role, User, UserStatus
from tests.factories.user import UserFactory


class TestUserModel:
    def test_defaults(self, session):
        user = User(email="new@example.com", name="New")
        user.password = "secret1"
        session.add(user)
        session.flush()

        assert user.status is UserStatus.PENDING
        assert user.role is Role.USER
        assert user.remarks == ""
        assert user.activated_at is None
        assert user.created_at is not None

    def test_password_is_write_only_and_hashed(self):
        user = User(email="p@example.com")
        user.password = "secret1"

        assert user.password_hash != "secret1"
        assert user.verify_password("secret1")
        assert not user.verify_password("other")
        with pytest.raises(AttributeError):
            _ = user.password

    def test_same_password_hashes_differently(self):
        a, b = User(email="a@example.com"), User(email="b@example.com")
        a.password = b.password = "secret1"

        assert a.password_hash != b.password_hash

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            User(email="p@example.com").password = ""

    def test_email_is_normalized_and_validated(self):
        assert User(email="  MiXeD@Example.COM ").email == "mixed@example.com"
        with pytest.raises(ValueError):
            User(email="not-an-email")

    def test_email_unique(self, session):
        UserFactory(email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(email="DUP@example.com")
        session.rollback()

    def test_mark_active_stamps_once(self):
        user = User(email="s@example.com")
        first = datetime(2026, 1, 1, tzinfo=UTC)

        user.mark_active(first)
        user.status = UserStatus.BLOCKED
        user.mark_active(datetime(2026, 6, 1, tzinfo=UTC))

        assert user.status is UserStatus.ACTIVE
        assert user.activated_at == first

    def test_is_admin(self):
        assert User(email="a@example.com", role=Role.ADMIN).is_admin
        assert not User(email="u@example.com", role=Role.USER).is_admin
