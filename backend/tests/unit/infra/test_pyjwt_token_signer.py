"""Unit tests for :class:`PyJWTTokenSigner`."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time

from gallery_admin.core.config import TokenSettings
from gallery_admin.infra.jwt.pyjwt_token_signer import PyJWTTokenSigner
from gallery_admin.services._shared.errors import InvalidTokenError, TokenExpiredError
from gallery_admin.services._shared.ports.token_signer import TokenType


@pytest.fixture()
def settings() -> TokenSettings:
    return TokenSettings(
        access_secret="access-secret",
        refresh_secret="refresh-secret",
        hash_secret="hash-secret",
        access_ttl=timedelta(minutes=5),
        refresh_ttl=timedelta(hours=1),
    )


@pytest.fixture()
def signer(settings) -> PyJWTTokenSigner:
    return PyJWTTokenSigner(settings)


class TestIssueAndVerify:
    def test_access_token_round_trip_carries_subject_and_type(self, signer):
        token = signer.issue_access_token(42)

        claims = signer.verify_access_token(token)

        assert claims.user_id == 42
        assert claims.token_type is TokenType.ACCESS
        assert claims.jti

    def test_tokens_issued_in_the_same_second_differ(self, signer):
        with freeze_time("2026-01-01 12:00:00"):
            first = signer.issue_refresh_token(1)
            second = signer.issue_refresh_token(1)

        assert first != second

    def test_expiry_follows_configured_lifetime(self, signer):
        with freeze_time("2026-01-01 12:00:00"):
            claims = signer.verify_refresh_token(signer.issue_refresh_token(7))

        assert claims.expires_at.isoformat() == "2026-01-01T13:00:00+00:00"


class TestRejections:
    def test_expired_access_token_raises_expired(self, signer):
        with freeze_time("2026-01-01 12:00:00"):
            token = signer.issue_access_token(1)
        with freeze_time("2026-01-01 12:05:01"):
            with pytest.raises(TokenExpiredError):
                signer.verify_access_token(token)

    def test_access_token_does_not_verify_as_refresh(self, signer):
        token = signer.issue_access_token(1)

        with pytest.raises(InvalidTokenError):
            signer.verify_refresh_token(token)

    def test_refresh_token_does_not_verify_as_access(self, signer):
        token = signer.issue_refresh_token(1)

        with pytest.raises(InvalidTokenError):
            signer.verify_access_token(token)

    def test_tampered_token_is_invalid(self, signer):
        token = signer.issue_access_token(1)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(InvalidTokenError):
            signer.verify_access_token(tampered)

    def test_garbage_is_invalid(self, signer):
        with pytest.raises(InvalidTokenError):
            signer.verify_access_token("not-a-jwt")

    def test_type_claim_mismatch_under_the_right_key_is_invalid(self, signer, settings):
        """
        GIVEN a token signed with the access secret but typed as refresh
        WHEN it is verified as an access token
        THEN verification fails
        """
        forged = jwt.encode(
            {"sub": "1", "type": "refresh", "jti": "x", "iat": 0, "exp": 4102444800},
            settings.access_secret,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            signer.verify_access_token(forged)

    def test_non_numeric_subject_is_invalid(self, signer, settings):
        forged = jwt.encode(
            {"sub": "admin", "type": "access", "jti": "x", "iat": 0, "exp": 4102444800},
            settings.access_secret,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            signer.verify_access_token(forged)

    def test_missing_claims_are_invalid(self, signer, settings):
        forged = jwt.encode({"sub": "1", "type": "access"}, settings.access_secret, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            signer.verify_access_token(forged)
