"""
Opaque, stateful refresh tokens.

Unlike access tokens these carry no claims: a refresh token is 32 random bytes,
hex encoded, and everything known about it (owner, expiry, revocation) lives in
the database row keyed by the token itself.
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from models.base_model import utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import SessionExpiredError, SessionNotFoundError, SessionRevokedError

REFRESH_TOKEN_BYTES = 32
DEFAULT_REFRESH_TOKEN_EXPIRES = timedelta(days=60)


class RefreshTokenStorage(Protocol):
    def create_refresh_token(self, token: str, user_id: str, expires_at: datetime) -> RefreshToken: ...

    def get_refresh_token(self, token: str) -> Optional[RefreshToken]: ...

    def revoke_refresh_token(self, token: str) -> bool: ...


def make_refresh_token() -> str:
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


class RefreshTokenService:
    def __init__(
        self,
        storage: RefreshTokenStorage,
        expires_in: timedelta = DEFAULT_REFRESH_TOKEN_EXPIRES,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._storage = storage
        self._expires_in = expires_in
        self._clock = clock

    def issue(self, user_id: str) -> RefreshToken:
        """Mint and persist a new refresh token. StorageError propagates as-is."""
        expires_at = self._clock() + self._expires_in
        return self._storage.create_refresh_token(make_refresh_token(), user_id, expires_at)

    def validate(self, token: str) -> RefreshToken:
        record = self._storage.get_refresh_token(token)
        if record is None:
            raise SessionNotFoundError("unknown refresh token")
        if record.is_expired(self._clock()):
            raise SessionExpiredError("refresh token expired")
        if record.is_revoked:
            raise SessionRevokedError("refresh token revoked")
        return record

    def revoke(self, token: str) -> None:
        """Revoke a refresh token. Revoking twice keeps the first revoked_at."""
        if not self._storage.revoke_refresh_token(token):
            raise SessionNotFoundError("unknown refresh token")
