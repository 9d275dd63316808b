"""
Domain exceptions for credentials, tokens and sessions.

The AuthError families keep the precise cause of a failure for logs and tests.
Request-facing code folds all of them into UnauthorizedError (see utils.sessions
and api.errors) so callers never learn which check failed.
"""
from __future__ import annotations


class AuthError(Exception):
    """Base class for every authentication failure kind."""


# Password credentials
class CredentialError(AuthError):
    pass


class PasswordMismatchError(CredentialError):
    pass


class MalformedPasswordHashError(CredentialError):
    pass


# Access tokens (JWT)
class TokenError(AuthError):
    pass


class MalformedTokenError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class TokenSignatureError(TokenError):
    pass


# Refresh tokens (stored sessions)
class SessionError(AuthError):
    pass


class SessionNotFoundError(SessionError):
    pass


class SessionExpiredError(SessionError):
    pass


class SessionRevokedError(SessionError):
    pass


# Authorization header
class HeaderError(AuthError):
    pass


class MissingAuthHeaderError(HeaderError):
    pass


class MalformedAuthHeaderError(HeaderError):
    pass


class StorageError(Exception):
    """Persistence failure; surfaced as a server error, never retried."""


# Login outcomes
class LoginError(Exception):
    pass


class AccountNotFoundError(LoginError):
    pass


class InvalidCredentialsError(LoginError):
    pass


class UnauthorizedError(Exception):
    """The single outcome reported for any failed request authentication."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
