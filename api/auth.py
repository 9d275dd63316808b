"""
Authentication blueprint:
- POST /login   -> access token (JWT) + refresh token
- POST /refresh -> new access token for a stored refresh token
- POST /revoke  -> revoke a stored refresh token

Access tokens are stateless HS256 JWTs (utils.security); refresh tokens are
opaque random strings persisted in the refresh_tokens table (utils.refresh_tokens).
Refresh and revoke read the refresh token from the Authorization header.
"""
from __future__ import annotations

from datetime import timedelta

from flask import Blueprint, request, jsonify, current_app

from api.deps import get_sessions
from models.schemas.user import UserLoginSchema, UserOutSchema

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


def _requested_expiry(seconds: int | None) -> timedelta | None:
    """Clients may ask for a shorter access token, never a longer one."""
    max_expiry = current_app.config["ACCESS_TOKEN_EXPIRES"]
    if seconds is None or seconds <= 0:
        return None
    if seconds >= max_expiry.total_seconds():
        return None
    return timedelta(seconds=seconds)


@bp.post("/login")
def login():
    """
    Login: returns the user with an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
             expires_in_seconds: { type: integer }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
      404:
        description: User not found
    """
    payload = user_login_schema.load(request.get_json(silent=True) or {})
    result = get_sessions().login(
        payload["email"],
        payload["password"],
        expires_in=_requested_expiry(payload.get("expires_in_seconds")),
    )

    body = user_out_schema.dump(result.user)
    body["token"] = result.access_token
    body["refresh_token"] = result.refresh_token.token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Unauthorized
    """
    token = get_sessions().refresh(request.headers)
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Unauthorized
    """
    get_sessions().revoke(request.headers)
    return ("", 204)
