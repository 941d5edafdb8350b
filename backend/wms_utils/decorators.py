from functools import wraps
from flask import jsonify, session


def login_required(fn):
    """
    Restrict a view to sessions that passed the login screen.
    Usage: @login_required
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not session.get("authenticated"):
            return jsonify({"error": "Login required"}), 401
        return fn(*args, **kwargs)
    return wrapper
