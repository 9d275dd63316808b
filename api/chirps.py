from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, abort, g

from api.deps import get_storage
from models.chirp import Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required

bp = Blueprint("chirps", __name__)

create_schema = ChirpCreateSchema()
out_schema = ChirpOutSchema()
out_list_schema = ChirpOutSchema(many=True)


def parse_chirp_id(chirp_id: str) -> str:
    try:
        return str(uuid.UUID(chirp_id))
    except ValueError:
        abort(400, description="Invalid chirp ID")


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the current user
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      401: { description: Unauthorized }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    storage = get_storage()
    chirp = Chirp(body=data["body"], user_id=g.current_user_id)
    storage.new(chirp)
    storage.save()
    return jsonify(out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List all chirps, oldest first
    ---
    tags: [Chirps]
    responses:
      200: { description: OK }
    """
    return jsonify(out_list_schema.dump(get_storage().list_chirps())), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags: [Chirps]
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Invalid id }
      404: { description: Not found }
    """
    chirp = get_storage().get(Chirp, parse_chirp_id(chirp_id))
    if not chirp:
        abort(404, description="Chirp not found")
    return jsonify(out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of the current user's chirps
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      400: { description: Invalid id }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Not found }
    """
    storage = get_storage()
    chirp = storage.get(Chirp, parse_chirp_id(chirp_id))
    if not chirp:
        abort(404, description="Chirp not found")
    if chirp.user_id != g.current_user_id:
        abort(403, description="You can only delete your own chirps")
    storage.delete(chirp)
    storage.save()
    return ("", 204)
