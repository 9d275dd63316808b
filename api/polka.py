"""Webhooks from the Polka payment provider."""
from __future__ import annotations

import hmac
import logging

from flask import Blueprint, request, abort, current_app

from api.deps import get_storage
from models.user import User
from models.schemas.webhook import USER_UPGRADED, WebhookSchema
from utils.exceptions import HeaderError, UnauthorizedError
from utils.security import get_api_key

bp = Blueprint("polka", __name__)

webhook_schema = WebhookSchema()


@bp.post("/polka/webhooks")
def polka_webhook():
    """
    Polka payment events; upgrades users to Chirpy Red
    ---
    tags: [Webhooks]
    consumes:
      - application/json
    parameters:
      - in: header
        name: Authorization
        type: string
        required: true
        description: "ApiKey <key>"
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Handled or ignored }
      401: { description: Bad API key }
      404: { description: User not found }
    """
    expected = current_app.config.get("POLKA_KEY", "")
    try:
        api_key = get_api_key(request.headers)
    except HeaderError as exc:
        raise UnauthorizedError() from exc
    if not expected or not hmac.compare_digest(api_key.encode(), expected.encode()):
        raise UnauthorizedError()

    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        abort(400, description="Webhook body must be a JSON object")
    if payload.get("event") != USER_UPGRADED:
        return ("", 204)

    data = webhook_schema.load(payload)
    storage = get_storage()
    user = storage.get(User, str(data["data"]["user_id"]))
    if not user:
        abort(404, description="User not found")
    user.is_chirpy_red = True
    storage.new(user)
    storage.save()
    logging.info("user %s upgraded to Chirpy Red", user.id)
    return ("", 204)
