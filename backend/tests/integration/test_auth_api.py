"""End-to-end tests of the token lifecycle over HTTP."""

from __future__ import annotations

import pytest

from gallery_admin.core.constants import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER
from tests.factories.user import DEFAULT_PASSWORD, AdminFactory, UserFactory
from tests.helpers.assertions import assert_envelope, assert_no_token_headers
from tests.helpers.http import API, login, token_headers, tokens_from


def _register_body(**overrides):
    body = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "secret1",
        "whatsapp": "+34600000000",
        "watermark": "ada",
    }
    body.update(overrides)
    return body


class TestRegister:
    def test_creates_pending_user_and_issues_pair(self, client):
        resp = client.post(f"{API}/auth/register", json=_register_body())

        body = assert_envelope(resp, status=201, success=True, message="Register Success")
        assert body["payload"]["email"] == "ada@example.com"
        assert body["payload"]["status"] == "pending"
        assert body["payload"]["role"] == "user"
        assert "password" not in body["payload"]
        assert "passwordHash" not in body["payload"]
        tokens_from(resp)

    def test_duplicate_email_is_conflict(self, client, session):
        UserFactory(email="ada@example.com")
        session.commit()

        resp = client.post(f"{API}/auth/register", json=_register_body(email="ADA@example.com"))

        assert_envelope(resp, status=409, success=False, message="User Already Exists")
        assert_no_token_headers(resp)

    def test_missing_fields_fail_validation(self, client):
        resp = client.post(f"{API}/auth/register", json={"email": "x@example.com"})

        body = assert_envelope(resp, status=400, success=False, message="Validation Failed")
        assert {"name", "password", "whatsapp", "watermark"} <= set(body["payload"]["errors"])

    def test_admin_role_is_refused(self, client):
        resp = client.post(f"{API}/auth/register", json=_register_body(role="admin"))

        assert_envelope(resp, status=403, success=False)


class TestLogin:
    def test_success(self, client, session):
        user = UserFactory()
        session.commit()

        resp = client.post(f"{API}/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD})

        body = assert_envelope(resp, status=200, success=True, message="Login Success")
        assert body["payload"]["id"] == user.id
        tokens_from(resp)

    @pytest.mark.parametrize("password", ["wrong-password", "PASSW0RD!"])
    def test_bad_credentials(self, client, session, password):
        user = UserFactory()
        session.commit()

        resp = client.post(f"{API}/auth/login", json={"email": user.email, "password": password})

        assert_envelope(resp, status=401, success=False, message="Invalid Email or Password")
        assert_no_token_headers(resp)

    def test_role_filter_mismatch(self, client, session):
        user = UserFactory()
        session.commit()

        resp = client.post(
            f"{API}/auth/login",
            json={"email": user.email, "password": DEFAULT_PASSWORD, "role": "admin"},
        )

        assert_envelope(resp, status=401, success=False, message="Invalid Role")


class TestStatus:
    def test_returns_current_user(self, client, session):
        user = UserFactory()
        session.commit()
        access, _ = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.get(f"{API}/auth/status", headers=token_headers(access))

        body = assert_envelope(resp, status=200, success=True, message="Authorized")
        assert body["payload"]["email"] == user.email

    def test_prefix_is_case_insensitive(self, client, session):
        user = UserFactory()
        session.commit()
        access, _ = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.get(f"{API}/auth/status", headers={ACCESS_TOKEN_HEADER: f"bearer {access}"})

        assert resp.status_code == 200

    @pytest.mark.parametrize("headers", [{}, {ACCESS_TOKEN_HEADER: "Bearer undefined"}])
    def test_missing_token(self, client, headers):
        resp = client.get(f"{API}/auth/status", headers=headers)

        assert_envelope(resp, status=401, success=False, message="Access Token Missing")
        assert_no_token_headers(resp)

    def test_refresh_token_is_not_an_access_token(self, client, session):
        user = UserFactory()
        session.commit()
        _, refresh = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.get(f"{API}/auth/status", headers=token_headers(refresh))

        assert_envelope(resp, status=401, success=False, message="Invalid Token")

    def test_deleted_user(self, client, session):
        user = UserFactory()
        session.commit()
        access, _ = login(client, user.email, DEFAULT_PASSWORD)
        session.delete(user)
        session.commit()

        resp = client.get(f"{API}/auth/status", headers=token_headers(access))

        assert_envelope(resp, status=404, success=False, message="User Not Found")


class TestRefresh:
    def test_rotates_pair_and_rejects_replay(self, client, session):
        user = UserFactory()
        session.commit()
        _, refresh = login(client, user.email, DEFAULT_PASSWORD)

        first = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=refresh))
        replay = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=refresh))

        assert_envelope(first, status=200, success=True, message="Tokens Refreshed Successfully")
        new_access, new_refresh = tokens_from(first)
        assert new_refresh != refresh
        assert_envelope(replay, status=403, success=False, message="Invalid Refresh Token")
        assert_no_token_headers(replay)
        assert client.get(f"{API}/auth/status", headers=token_headers(new_access)).status_code == 200

    def test_legacy_get_route(self, client, session):
        user = UserFactory()
        session.commit()
        _, refresh = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.get(f"{API}/auth/token-refresh", headers=token_headers(refresh=refresh))

        assert resp.status_code == 200
        tokens_from(resp)

    def test_missing_refresh_token(self, client):
        resp = client.post(f"{API}/auth/refresh")

        assert_envelope(resp, status=401, success=False, message="Refresh Token Missing")


class TestLogout:
    def test_revokes_access_and_refresh(self, client, session):
        user = UserFactory()
        session.commit()
        access, refresh = login(client, user.email, DEFAULT_PASSWORD)

        resp = client.post(f"{API}/auth/logout", headers=token_headers(access, refresh))

        assert_envelope(resp, status=200, success=True, message="Logout Success")
        assert_no_token_headers(resp)
        status = client.get(f"{API}/auth/status", headers=token_headers(access))
        assert_envelope(status, status=403, success=False, message="Token Has Been Revoked")
        again = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=refresh))
        assert_envelope(again, status=403, success=False, message="Invalid Refresh Token")

    def test_without_tokens_succeeds(self, client):
        resp = client.get(f"{API}/auth/logout")

        assert_envelope(resp, status=200, success=True, message="Logout Success")

    def test_invalid_refresh_token(self, client):
        resp = client.post(f"{API}/auth/logout", headers={REFRESH_TOKEN_HEADER: "Bearer garbage"})

        assert_envelope(resp, status=401, success=False, message="Invalid Token")
        assert_no_token_headers(resp)

    def test_other_sessions_survive(self, client, session):
        admin = AdminFactory()
        session.commit()
        first_access, first_refresh = login(client, admin.email, DEFAULT_PASSWORD)
        second_access, _ = login(client, admin.email, DEFAULT_PASSWORD)

        client.post(f"{API}/auth/logout", headers=token_headers(first_access, first_refresh))

        assert client.get(f"{API}/auth/status", headers=token_headers(second_access)).status_code == 200


class TestSessionLifecycle:
    def test_register_login_refresh_replay_and_logout(self, client):
        registered = client.post(f"{API}/auth/register", json=_register_body())
        assert_envelope(registered, status=201, success=True)
        register_pair = tokens_from(registered)

        login_access, login_refresh = login(client, "ada@example.com", "secret1")
        assert login_access != register_pair[0]
        assert login_refresh != register_pair[1]

        rotated = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=login_refresh))
        assert_envelope(rotated, status=200, success=True, message="Tokens Refreshed Successfully")
        access, refresh = tokens_from(rotated)
        assert (access, refresh) != (login_access, login_refresh)

        replay = client.post(f"{API}/auth/refresh", headers=token_headers(refresh=login_refresh))
        assert_envelope(replay, status=403, success=False, message="Invalid Refresh Token")
        assert_no_token_headers(replay)

        out = client.post(f"{API}/auth/logout", headers=token_headers(access, refresh))
        assert_envelope(out, status=200, success=True, message="Logout Success")

        status = client.get(f"{API}/auth/status", headers=token_headers(access))
        assert_envelope(status, status=403, success=False, message="Token Has Been Revoked")
        assert_no_token_headers(status)
