"""Unit tests for JWT access tokens."""

from __future__ import annotations

import json
import time
import uuid
from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time

from utils.exceptions import MalformedTokenError, TokenError, TokenExpiredError, TokenSignatureError
from utils.security import TOKEN_ISSUER, create_access_token, decode_access_token

from tests.helpers.auth import TEST_SECRET, forge_token

OTHER_SECRET = "another-secret-fedcba9876543210fedcba9876543210"


def test_round_trip_returns_the_user_id() -> None:
    user_id = uuid.uuid4()

    token = create_access_token(user_id, TEST_SECRET, timedelta(minutes=1))

    assert decode_access_token(token, TEST_SECRET) == str(user_id)


def test_claims_carry_issuer_and_lifetime() -> None:
    user_id = str(uuid.uuid4())

    token = create_access_token(user_id, TEST_SECRET, timedelta(hours=1))
    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"], issuer=TOKEN_ISSUER)

    assert claims["sub"] == user_id
    assert claims["iss"] == "chirpy"
    assert claims["exp"] - claims["iat"] == 3600
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_tokens_minted_back_to_back_differ() -> None:
    user_id = uuid.uuid4()

    first = create_access_token(user_id, TEST_SECRET, timedelta(hours=1))
    second = create_access_token(user_id, TEST_SECRET, timedelta(hours=1))

    assert first != second


def test_wrong_secret_is_rejected() -> None:
    token = create_access_token(uuid.uuid4(), TEST_SECRET, timedelta(minutes=1))

    with pytest.raises(TokenSignatureError):
        decode_access_token(token, OTHER_SECRET)


def test_negative_lifetime_is_already_expired() -> None:
    token = create_access_token(uuid.uuid4(), TEST_SECRET, -timedelta(minutes=1))

    with pytest.raises(TokenExpiredError):
        decode_access_token(token, TEST_SECRET)


def test_token_expires_exactly_at_its_lifetime() -> None:
    user_id = uuid.uuid4()
    with freeze_time("2024-01-01 12:00:00") as frozen:
        token = create_access_token(user_id, TEST_SECRET, timedelta(seconds=30))
        frozen.tick(timedelta(seconds=29))
        assert decode_access_token(token, TEST_SECRET) == str(user_id)

        frozen.tick(timedelta(seconds=1))
        with pytest.raises(TokenExpiredError):
            decode_access_token(token, TEST_SECRET)


@pytest.mark.parametrize("algorithm", ["none", "HS512"])
def test_unexpected_algorithm_is_rejected(algorithm: str) -> None:
    token = forge_token(TEST_SECRET, algorithm=algorithm)

    with pytest.raises(TokenSignatureError):
        decode_access_token(token, TEST_SECRET)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not-a-jwt",
        "a.b.c",
        forge_token(TEST_SECRET, sub="not-a-uuid"),
        forge_token(TEST_SECRET, sub=None),
        forge_token(TEST_SECRET, iss="someone-else"),
        forge_token(TEST_SECRET, exp=None),
    ],
)
def test_malformed_tokens(token: str) -> None:
    with pytest.raises(MalformedTokenError):
        decode_access_token(token, TEST_SECRET)


def test_token_errors_share_a_family() -> None:
    for cls in (MalformedTokenError, TokenExpiredError, TokenSignatureError):
        assert issubclass(cls, TokenError)


def test_non_string_subject_is_malformed() -> None:
    now = int(time.time())
    claims = {"iss": "chirpy", "sub": 12345, "iat": now, "exp": now + 300}
    # sign the raw claims so no client-side claim check runs first
    token = jwt.PyJWS().encode(json.dumps(claims).encode(), TEST_SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        decode_access_token(token, TEST_SECRET)
