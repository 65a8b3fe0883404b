from __future__ import annotations
from functools import wraps
from flask import request, current_app

from utils.exceptions import Unauthorized


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise Unauthorized("Missing or invalid Authorization header")
    return auth.split(" ", 1)[1].strip()


def jwt_required():
    """
    Validate the bearer access token and pass the caller's AuthContext to
    the view as the `ctx` keyword argument.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth_service = current_app.extensions["auth_service"]
            kwargs["ctx"] = auth_service.authenticate(bearer_token())
            return fn(*args, **kwargs)

        return wrapper

    return decorator
