# gallery_admin/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from gallery_admin.core.constants import ABSENT_TOKEN_MARKERS, Messages
from gallery_admin.models.user import Role, User
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    SessionUserNotFoundError,
    TokenExpiredError,
    TokenMissingError,
    TokenRevokedError,
    violates,
)
from gallery_admin.services._shared.ports.token_index import HashedTokenIndex, TokenHasher
from gallery_admin.services._shared.ports.token_signer import TokenSigner
from gallery_admin.services.auth.dto import (
    LoginIn,
    LogoutIn,
    RegisterIn,
    SessionOut,
    TokenPairOut,
)

logger = logging.getLogger(__name__)


def is_absent(token: str | None) -> bool:
    """True for a missing token or one of the placeholder values clients send."""
    return token is None or token.strip() in ABSENT_TOKEN_MARKERS


class SessionService(BaseService):
    """
    Token lifecycle service (register / login / authenticate / refresh / logout).

    Sessions are not stored server side: a client is authenticated by the
    token pair it holds. The service keeps two traces in the hashed index:

    * one record per *unredeemed* refresh token, which makes refresh tokens
      single-use and lets logout invalidate them;
    * one blacklist entry per access token revoked by logout, which closes the
      window between logout and the token's own expiry.

    Raw tokens never reach the index; they go through ``hasher`` first.
    """

    def __init__(
        self,
        *,
        signer: TokenSigner,
        index: HashedTokenIndex,
        hasher: TokenHasher,
        blacklist_ttl: timedelta = timedelta(minutes=10),
        allow_role_on_register: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        :param signer: Issues and verifies access/refresh JWTs.
        :param index: Refresh-token store and access-token blacklist.
        :param hasher: Keyed hash applied to every token before it touches ``index``.
        :param blacklist_ttl: Minimum lifetime of a blacklist entry.
        :param allow_role_on_register: Honour a requested ``admin`` role on register.
        """
        super().__init__(clock=clock)
        self.signer = signer
        self.index = index
        self.hasher = hasher
        self.blacklist_ttl = blacklist_ttl
        self.allow_role_on_register = allow_role_on_register

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_pair(self, user_id: int) -> TokenPairOut:
        """
        Issue a new access/refresh pair.

        The refresh hash is recorded before the pair is returned, so a client
        can never hold a refresh token the index does not know about.
        """
        access = self.signer.issue_access_token(user_id)
        refresh = self.signer.issue_refresh_token(user_id)
        self.index.record_refresh_token(self.hasher.hash(refresh), user_id)
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Register / Login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> SessionOut:
        """
        Create a pending account and sign it in.

        :raises ConflictError: If the email is already registered.
        :raises AuthorizationError: If an admin role is requested and self
            promotion is disabled.
        """
        role = dto.role or Role.USER
        if role is Role.ADMIN and not self.allow_role_on_register:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        with self.rw_uow() as uow:
            if uow.users.exists_by_email(dto.email):
                raise ConflictError("User", Messages.USER_EXISTS)
            user = User(
                name=dto.name,
                email=dto.email,
                whatsapp=dto.whatsapp,
                watermark=dto.watermark,
                role=role,
            )
            user.password = dto.password
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                # Lost a race with a concurrent registration of the same email
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", Messages.USER_EXISTS) from exc
                raise
            user_id = user.id

        tokens = self.issue_pair(user_id)
        logger.info("auth.register", extra={"user_id": user_id})
        return SessionOut(user=user, tokens=tokens)

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Verify credentials and issue a fresh pair.

        Account status is not checked here; the client decides what a
        pending or blocked user may see.

        :raises AuthenticationError: On unknown email, wrong password, or a
            role filter that does not match.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                raise AuthenticationError(Messages.INVALID_EMAIL_PASSWORD)
            if dto.role is not None and user.role is not dto.role:
                raise AuthenticationError(Messages.INVALID_ROLE)

        tokens = self.issue_pair(user.id)
        logger.info("auth.login", extra={"user_id": user.id})
        return SessionOut(user=user, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Authenticate
    # ------------------------------------------------------------------ #

    def authenticate(self, access_token: str | None) -> User:
        """
        Resolve the user behind an access token.

        Checks run in order: presence, blacklist, signature/expiry, user.

        :raises TokenMissingError: No token presented.
        :raises TokenRevokedError: The token was revoked by logout.
        :raises TokenExpiredError: Signature fine but past expiry.
        :raises InvalidTokenError: Tampered, malformed or wrong class.
        :raises SessionUserNotFoundError: The account no longer exists.
        """
        if access_token is None or is_absent(access_token):
            raise TokenMissingError(Messages.ACCESS_TOKEN_MISSING)

        if self.index.is_blacklisted(self.hasher.hash(access_token)):
            raise TokenRevokedError()

        claims = self.signer.verify_access_token(access_token)

        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
        if user is None:
            raise SessionUserNotFoundError()
        return user

    def try_authenticate(self, access_token: str | None) -> User | None:
        """Like :meth:`authenticate` but returns ``None`` instead of raising on token problems."""
        try:
            return self.authenticate(access_token)
        except (
            TokenMissingError,
            TokenRevokedError,
            TokenExpiredError,
            InvalidTokenError,
            SessionUserNotFoundError,
        ):
            return None

    # ------------------------------------------------------------------ #
    # Refresh (rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> TokenPairOut:
        """
        Redeem a refresh token for a brand-new pair.

        The stored record is consumed in one atomic step before anything
        else, so a token is redeemable at most once even under concurrent
        calls, and a token that then fails verification is gone as well.

        :raises TokenMissingError: No token presented.
        :raises InvalidRefreshTokenError: Unknown or already redeemed.
        :raises TokenExpiredError: Signed expiry passed ("session expired").
        :raises InvalidTokenError: Signature or structure invalid.
        :raises SessionUserNotFoundError: The account no longer exists.
        """
        if refresh_token is None or is_absent(refresh_token):
            raise TokenMissingError(Messages.REFRESH_TOKEN_MISSING)

        record = self.index.consume_refresh_token(self.hasher.hash(refresh_token))
        if record is None:
            logger.warning("auth.refresh.unknown_token")
            raise InvalidRefreshTokenError()

        try:
            claims = self.signer.verify_refresh_token(refresh_token)
        except TokenExpiredError as exc:
            raise TokenExpiredError(Messages.SESSION_EXPIRE) from exc

        if claims.user_id != record.user_id:
            raise InvalidRefreshTokenError()

        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
        if user is None:
            raise SessionUserNotFoundError()

        logger.info("auth.refresh", extra={"user_id": user.id})
        return self.issue_pair(user.id)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        End the session held by the presented tokens.

        Without a refresh token there is nothing to end and the call succeeds.
        Otherwise the refresh token must verify and its user must exist; a
        presented access token that still verifies is blacklisted for the rest
        of its lifetime, and the refresh record is deleted.

        :raises TokenExpiredError: The refresh token is past expiry.
        :raises InvalidTokenError: The refresh token is invalid.
        :raises SessionUserNotFoundError: The account no longer exists.
        """
        if dto.refresh_token is None or is_absent(dto.refresh_token):
            return

        claims = self.signer.verify_refresh_token(dto.refresh_token)

        with self.ro_uow() as uow:
            user = uow.users.get(claims.user_id)
        if user is None:
            raise SessionUserNotFoundError()

        if dto.access_token is not None and not is_absent(dto.access_token):
            self._blacklist_access(dto.access_token)

        self.index.delete_refresh_token(self.hasher.hash(dto.refresh_token))
        logger.info("auth.logout", extra={"user_id": claims.user_id})

    def revoke_user_sessions(self, user_id: int) -> int:
        """Drop every unredeemed refresh token of ``user_id``."""
        return self.index.revoke_all_for_user(user_id)

    def _blacklist_access(self, access_token: str) -> None:
        try:
            claims = self.signer.verify_access_token(access_token)
        except (TokenExpiredError, InvalidTokenError):
            # Already unusable; nothing to revoke.
            return
        remaining = claims.expires_at - self.now_utc()
        ttl = max(remaining, self.blacklist_ttl)
        self.index.blacklist_access_token(self.hasher.hash(access_token), ttl)
