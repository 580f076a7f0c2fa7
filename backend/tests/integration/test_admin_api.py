"""Admin endpoints: gate, dashboard, user management, images and footer links."""

from __future__ import annotations

import io

import pytest

from gallery_admin.models.social_media import Platform
from gallery_admin.models.user import UserStatus
from tests.factories.image import ImageFactory
from tests.factories.like import LikeFactory
from tests.factories.social_media import SocialMediaLinkFactory
from tests.factories.user import DEFAULT_PASSWORD, AdminFactory, UserFactory
from tests.helpers.assertions import assert_envelope, assert_pagination
from tests.helpers.http import API, login, token_headers


@pytest.fixture()
def admin(session):
    user = AdminFactory()
    session.commit()
    return user


@pytest.fixture()
def admin_headers(client, admin):
    access, _ = login(client, admin.email, DEFAULT_PASSWORD)
    return token_headers(access)


class TestGate:
    def test_requires_token(self, client):
        resp = client.get(f"{API}/admin/dashboard/stats")

        assert_envelope(resp, status=401, success=False, message="Access Token Missing")

    def test_rejects_non_admin(self, client, session):
        user = UserFactory(status=UserStatus.ACTIVE)
        session.commit()
        access, _ = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.get(f"{API}/admin/users", headers=token_headers(access))

        assert_envelope(
            resp, status=403, success=False, message="Access denied. Admin privileges required."
        )

    def test_preflight_is_not_gated(self, client):
        resp = client.options(f"{API}/admin/users")

        assert resp.status_code < 400


def test_dashboard_stats(client, session, admin_headers):
    UserFactory(status=UserStatus.ACTIVE)
    UserFactory()
    UserFactory(status=UserStatus.BLOCKED)
    LikeFactory()
    session.commit()

    resp = client.get(f"{API}/admin/dashboard/stats", headers=admin_headers)

    body = assert_envelope(resp, status=200, success=True)
    assert body["payload"] == {
        "totalUsers": 4,
        "activeUsers": 1,
        "pendingUsers": 2,
        "blockedUsers": 1,
        "totalImages": 1,
        "totalLikes": 1,
    }


class TestUsers:
    def test_list_excludes_caller(self, client, session, admin, admin_headers):
        UserFactory.create_batch(3)
        session.commit()

        resp = client.get(f"{API}/admin/users?limit=2", headers=admin_headers)

        body = assert_envelope(resp, status=200, success=True, message="Users retrieved successfully")
        assert len(body["payload"]["users"]) == 2
        assert admin.id not in {u["id"] for u in body["payload"]["users"]}
        assert_pagination(body["payload"], total=3)
        assert body["payload"]["pagination"]["totalPages"] == 2

    def test_list_filters(self, client, session, admin_headers):
        UserFactory(name="Blocked Bob", status=UserStatus.BLOCKED)
        UserFactory(name="Pending Pat")
        session.commit()

        blocked = client.get(f"{API}/admin/users?status=blocked", headers=admin_headers)
        search = client.get(f"{API}/admin/users?search=pat", headers=admin_headers)
        invalid = client.get(f"{API}/admin/users?status=zombie", headers=admin_headers)

        assert [u["name"] for u in blocked.get_json()["payload"]["users"]] == ["Blocked Bob"]
        assert [u["name"] for u in search.get_json()["payload"]["users"]] == ["Pending Pat"]
        assert_envelope(
            invalid,
            status=400,
            success=False,
            message="Invalid status. Must be active, pending, or blocked",
        )

    def test_update(self, client, session, admin_headers):
        user = UserFactory()
        session.commit()

        resp = client.put(
            f"{API}/admin/users/{user.id}",
            json={"name": "Renamed", "remarks": "vip"},
            headers=admin_headers,
        )

        body = assert_envelope(resp, status=200, success=True, message="User updated successfully")
        assert body["payload"]["name"] == "Renamed"
        assert body["payload"]["remarks"] == "vip"
        assert body["payload"]["status"] == "pending"

    def test_update_does_not_accept_status(self, client, session, admin_headers):
        user = UserFactory()
        session.commit()

        resp = client.put(
            f"{API}/admin/users/{user.id}", json={"status": "active"}, headers=admin_headers
        )

        body = assert_envelope(resp, status=400, success=False, message="Validation Failed")
        assert "status" in body["payload"]["errors"]
        session.expire_all()
        assert user.status is UserStatus.PENDING
        assert user.activated_at is None

    def test_update_cannot_block_self(self, client, session, admin, admin_headers):
        resp = client.put(
            f"{API}/admin/users/{admin.id}", json={"status": "blocked"}, headers=admin_headers
        )

        assert_envelope(resp, status=400, success=False)
        session.expire_all()
        assert admin.status is UserStatus.ACTIVE
        status = client.get(f"{API}/auth/status", headers=admin_headers)
        assert_envelope(status, status=200, success=True)

    def test_update_to_taken_email_conflicts(self, client, session, admin_headers):
        UserFactory(email="taken@example.com")
        user = UserFactory()
        session.commit()

        resp = client.put(
            f"{API}/admin/users/{user.id}", json={"email": "taken@example.com"}, headers=admin_headers
        )

        assert_envelope(resp, status=409, success=False)

    def test_update_missing_user(self, client, admin_headers):
        resp = client.put(f"{API}/admin/users/999999", json={"name": "x"}, headers=admin_headers)

        assert_envelope(resp, status=404, success=False, message="User Not Found")

    def test_set_status_activates(self, client, session, admin_headers):
        user = UserFactory()
        session.commit()

        resp = client.patch(
            f"{API}/admin/users/{user.id}/status", json={"status": "active"}, headers=admin_headers
        )

        body = assert_envelope(resp, status=200, success=True, message="User status updated to active")
        assert body["payload"]["activatedAt"] is not None

    def test_activated_at_only_moves_through_status_change(self, client, session, admin_headers):
        user = UserFactory()
        session.commit()

        updated = client.put(
            f"{API}/admin/users/{user.id}", json={"remarks": "checked"}, headers=admin_headers
        )
        assert assert_envelope(updated, status=200, success=True)["payload"]["activatedAt"] is None

        resp = client.patch(
            f"{API}/admin/users/{user.id}/status", json={"status": "active"}, headers=admin_headers
        )

        body = assert_envelope(resp, status=200, success=True)
        assert body["payload"]["status"] == "active"
        assert body["payload"]["activatedAt"] is not None

    def test_cannot_block_self(self, client, admin, admin_headers):
        resp = client.patch(
            f"{API}/admin/users/{admin.id}/status", json={"status": "blocked"}, headers=admin_headers
        )

        assert_envelope(
            resp, status=400, success=False, message="You cannot block or pending your own account"
        )

    def test_delete_revokes_sessions(self, client, session, admin_headers):
        user = UserFactory()
        session.commit()
        _, refresh = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.delete(f"{API}/admin/users/{user.id}", headers=admin_headers)

        assert_envelope(resp, status=200, success=True, message="User deleted successfully")
        again = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=refresh))
        assert again.status_code == 403

    def test_cannot_delete_self(self, client, admin, admin_headers):
        resp = client.delete(f"{API}/admin/users/{admin.id}", headers=admin_headers)

        assert_envelope(resp, status=400, success=False, message="You cannot delete your own account")


class TestImages:
    def test_upload_list_get_delete(self, client, admin, admin_headers, blob_storage):
        upload = client.post(
            f"{API}/admin/images/upload",
            data={"image": (io.BytesIO(b"\x89PNG fake"), "my cat.png", "image/png")},
            content_type="multipart/form-data",
            headers=admin_headers,
        )

        body = assert_envelope(upload, status=201, success=True, message="Image uploaded successfully")
        image = body["payload"]
        assert image["originalName"] == "my cat.png"
        assert image["s3Key"].endswith("-my-cat.png")
        assert image["uploadedBy"]["id"] == admin.id
        assert image["s3Key"] in blob_storage.objects

        listing = client.get(f"{API}/admin/images", headers=admin_headers)
        assert [i["id"] for i in listing.get_json()["payload"]["images"]] == [image["id"]]
        assert_pagination(listing.get_json()["payload"], total=1)

        fetched = client.get(f"{API}/admin/images/{image['id']}", headers=admin_headers)
        assert fetched.get_json()["payload"]["s3Url"] == image["s3Url"]

        deleted = client.delete(f"{API}/admin/images/{image['id']}", headers=admin_headers)
        assert_envelope(deleted, status=200, success=True, message="Image deleted successfully")
        assert image["s3Key"] not in blob_storage.objects
        missing = client.get(f"{API}/admin/images/{image['id']}", headers=admin_headers)
        assert_envelope(missing, status=404, success=False, message="Image Not Found")

    def test_upload_without_file(self, client, admin_headers):
        resp = client.post(
            f"{API}/admin/images/upload", data={}, content_type="multipart/form-data", headers=admin_headers
        )

        assert_envelope(resp, status=400, success=False, message="No file uploaded")

    def test_upload_rejects_non_images(self, client, admin_headers, blob_storage):
        resp = client.post(
            f"{API}/admin/images/upload",
            data={"image": (io.BytesIO(b"%PDF"), "doc.pdf", "application/pdf")},
            content_type="multipart/form-data",
            headers=admin_headers,
        )

        assert_envelope(resp, status=400, success=False, message="Only image files are allowed!")
        assert blob_storage.objects == {}

    def test_list_is_newest_first(self, client, session, admin_headers):
        older = ImageFactory()
        newer = ImageFactory()
        session.commit()

        resp = client.get(f"{API}/admin/images", headers=admin_headers)

        ids = [i["id"] for i in resp.get_json()["payload"]["images"]]
        assert ids.index(newer.id) < ids.index(older.id)


class TestSocialMedia:
    def test_update_links(self, client, admin_headers):
        resp = client.put(
            f"{API}/admin/social-media",
            json={
                "links": {
                    "youtube": "https://youtube.com/@gallery",
                    "instagram": {"url": "https://instagram.com/gallery", "isActive": False},
                }
            },
            headers=admin_headers,
        )

        body = assert_envelope(
            resp, status=200, success=True, message="All social media links updated successfully"
        )
        by_platform = {link["platform"]: link for link in body["payload"]}
        assert by_platform["youtube"]["url"] == "https://youtube.com/@gallery"
        assert by_platform["instagram"]["isActive"] is False

    @pytest.mark.parametrize("payload", [{}, {"links": ["youtube"]}, {"links": {"myspace": "x"}}])
    def test_update_rejects_bad_bodies(self, client, admin_headers, payload):
        resp = client.put(f"{API}/admin/social-media", json=payload, headers=admin_headers)

        assert_envelope(resp, status=400, success=False)

    def test_toggle(self, client, session, admin_headers):
        SocialMediaLinkFactory(platform=Platform.FACEBOOK, is_active=True)
        session.commit()

        resp = client.patch(f"{API}/admin/social-media/facebook/toggle", headers=admin_headers)

        body = assert_envelope(
            resp, status=200, success=True, message="facebook status deactivated successfully"
        )
        assert body["payload"]["isActive"] is False

    def test_toggle_unknown_platform(self, client, admin_headers):
        resp = client.patch(f"{API}/admin/social-media/myspace/toggle", headers=admin_headers)

        assert_envelope(resp, status=400, success=False, message="Invalid platform")
