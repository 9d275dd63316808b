from __future__ import annotations
from functools import wraps
from flask import request, g

from api.deps import get_sessions, get_storage
from models.user import User
from utils.exceptions import UnauthorizedError


def jwt_required():
    """Require a valid access token; exposes g.current_user and g.current_user_id."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user_id = get_sessions().authorize(request.headers)
            user = get_storage().get(User, user_id)
            if not user:
                # token outlived its account (e.g. after /admin/reset)
                raise UnauthorizedError()
            g.current_user = user
            g.current_user_id = user_id
            return fn(*args, **kwargs)

        return wrapper

    return decorator
