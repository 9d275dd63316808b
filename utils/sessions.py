"""
Session lifecycle: login, refresh, revoke and request authorization.

Every request-authentication failure (missing/malformed header, bad or expired
JWT, unknown/expired/revoked refresh token) leaves this module as a single
UnauthorizedError. The precise cause is only logged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Protocol

from models.refresh_token import RefreshToken
from models.user import User
from utils.exceptions import (
    AccountNotFoundError,
    AuthError,
    CredentialError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from utils.refresh_tokens import RefreshTokenService, RefreshTokenStorage
from utils.security import check_password, create_access_token, decode_access_token, get_bearer_token

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)


class SessionStorage(RefreshTokenStorage, Protocol):
    def get_user_by_email(self, email: str) -> Optional[User]: ...


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: RefreshToken


class SessionManager:
    """Mediates between stateless JWT helpers and the refresh-token store.

    The signing secret and lifetimes are fixed at construction.
    """

    def __init__(
        self,
        storage: SessionStorage,
        secret: str,
        access_token_expires: timedelta = DEFAULT_ACCESS_TOKEN_EXPIRES,
        refresh_tokens: Optional[RefreshTokenService] = None,
    ):
        if not secret:
            raise ValueError("SessionManager requires a non-empty signing secret")
        self._storage = storage
        self._secret = secret
        self._access_token_expires = access_token_expires
        self._refresh_tokens = refresh_tokens or RefreshTokenService(storage)

    @property
    def refresh_tokens(self) -> RefreshTokenService:
        return self._refresh_tokens

    def issue_access_token(self, user_id: str, expires_in: Optional[timedelta] = None) -> str:
        if expires_in is None:
            expires_in = self._access_token_expires
        return create_access_token(user_id, self._secret, expires_in)

    def login(self, email: str, password: str, expires_in: Optional[timedelta] = None) -> LoginResult:
        user = self._storage.get_user_by_email(email)
        if user is None:
            logger.info("login failed: no account for the given email")
            raise AccountNotFoundError("User not found")
        try:
            check_password(user.password_hash, password)
        except CredentialError as exc:
            logger.info("login failed for user %s: %s", user.id, exc.__class__.__name__)
            raise InvalidCredentialsError("Incorrect email or password") from exc

        access_token = self.issue_access_token(user.id, expires_in)
        refresh_token = self._refresh_tokens.issue(user.id)
        logger.info("user %s logged in", user.id)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)

    def refresh(self, headers: Mapping) -> str:
        """Exchange a valid refresh token for a new access token (default lifetime)."""
        record = self._validated_refresh_token(headers)
        return self.issue_access_token(record.user_id)

    def revoke(self, headers: Mapping) -> None:
        record = self._validated_refresh_token(headers)
        try:
            self._refresh_tokens.revoke(record.token)
        except AuthError as exc:
            raise self._unauthorized("revoke", exc) from exc
        logger.info("refresh token revoked for user %s", record.user_id)

    def authorize(self, headers: Mapping) -> str:
        """Resolve the acting user id from an access token in the headers."""
        try:
            token = get_bearer_token(headers)
            return decode_access_token(token, self._secret)
        except AuthError as exc:
            raise self._unauthorized("authorize", exc) from exc

    def _validated_refresh_token(self, headers: Mapping) -> RefreshToken:
        try:
            token = get_bearer_token(headers)
            return self._refresh_tokens.validate(token)
        except AuthError as exc:
            raise self._unauthorized("refresh token", exc) from exc

    @staticmethod
    def _unauthorized(action: str, exc: AuthError) -> UnauthorizedError:
        logger.info("%s rejected: %s (%s)", action, exc.__class__.__name__, exc)
        return UnauthorizedError()
