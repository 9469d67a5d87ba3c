from functools import wraps

from flask import session, jsonify


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify(error="Unauthorized", message="Please login first"), 401
        return fn(*args, **kwargs)

    return wrapper


def role_required(*roles):
    """Allow only sessions whose role tag is one of ``roles`` (UserType or its value)."""
    allowed = {getattr(r, "value", r) for r in roles}

    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if "uid" not in session:
                return jsonify(error="Unauthorized", message="Please login first"), 401
            if session.get("role") not in allowed:
                return jsonify(error="Forbidden", message="Insufficient permission"), 403
            return fn(*args, **kwargs)

        return wrapper

    return deco
