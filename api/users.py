from __future__ import annotations

from flask import Blueprint, request, jsonify, g

from api.deps import get_storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserUpdateSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    data = user_create_schema.load(request.get_json(silent=True) or {})

    storage = get_storage()
    user = User(email=data["email"], password_hash=hash_password(data["password"]))
    storage.new(user)
    storage.save()  # duplicate email -> IntegrityError -> 409

    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Update the current user's email and password
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    data = user_update_schema.load(request.get_json(silent=True) or {})

    storage = get_storage()
    user: User = g.current_user
    user.email = data["email"]
    user.password_hash = hash_password(data["password"])
    storage.new(user)
    storage.save()

    return jsonify(user_out_schema.dump(user)), 200
