"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT access token creation/verification via PyJWT
- Authorization header parsing (Bearer / ApiKey schemes)
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Mapping, Union

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from utils.exceptions import (
    MalformedAuthHeaderError,
    MalformedPasswordHashError,
    MalformedTokenError,
    MissingAuthHeaderError,
    PasswordMismatchError,
    TokenExpiredError,
    TokenSignatureError,
)

TOKEN_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"

# cost parameters are argon2-cffi defaults, shared by the whole process
ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2 (fresh salt on every call)."""
    return ph.hash(password)


def check_password(password_hash: str, password: str) -> None:
    """Verify a plaintext password against a stored Argon2 hash.

    Raises PasswordMismatchError when the password is wrong and
    MalformedPasswordHashError when the stored digest can't be parsed.
    """
    try:
        ph.verify(password_hash, password)
    except VerifyMismatchError as exc:
        raise PasswordMismatchError("password does not match") from exc
    except (InvalidHashError, UnicodeError, VerificationError) as exc:
        raise MalformedPasswordHashError("stored password hash is malformed") from exc


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID)."""
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(user_id: Union[str, uuid.UUID], secret: str, expires_in: timedelta) -> str:
    """Sign a short-lived access token asserting ``user_id``.

    The jti keeps two tokens minted within the same second distinct.
    """
    now = _now()
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        "jti": generate_jti(),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> str:
    """
    Validate an access token and return the user id it asserts.
    Only HS256 is accepted, whatever the token header claims.
    Raises TokenSignatureError, TokenExpiredError or MalformedTokenError.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("token expired") from exc
    except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
        raise TokenSignatureError(f"invalid token signature: {exc}") from exc
    except jwt.InvalidTokenError as exc:
        raise MalformedTokenError(f"invalid token: {exc}") from exc

    try:
        return str(uuid.UUID(decoded["sub"]))
    except (AttributeError, TypeError, ValueError) as exc:
        raise MalformedTokenError("invalid user id in token subject") from exc


def _get_authorization(headers: Mapping, scheme: str) -> str:
    if hasattr(headers, "getlist"):
        values = headers.getlist("Authorization")
    else:
        value = headers.get("Authorization")
        values = [] if value is None else [value]

    if not values:
        raise MissingAuthHeaderError("no Authorization header found")
    if len(values) > 1:
        raise MalformedAuthHeaderError("multiple Authorization headers")

    prefix = f"{scheme} "
    header = values[0]
    if not header.startswith(prefix):
        raise MalformedAuthHeaderError(f"Authorization header is not a {scheme} credential")
    credential = header[len(prefix):]
    if not credential:
        raise MalformedAuthHeaderError("empty credential in Authorization header")
    return credential


def get_bearer_token(headers: Mapping) -> str:
    """Return the token of an ``Authorization: Bearer <token>`` header, verbatim."""
    return _get_authorization(headers, "Bearer")


def get_api_key(headers: Mapping) -> str:
    """Return the key of an ``Authorization: ApiKey <key>`` header, verbatim."""
    return _get_authorization(headers, "ApiKey")
