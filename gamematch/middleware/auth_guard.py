from functools import wraps
from flask import jsonify, current_app, g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from gamematch.services.user_service import get_user


def _current_user():
    identity = get_jwt_identity()
    try:
        return get_user(int(identity))
    except (TypeError, ValueError):
        return None


def login_required(f):
    """
    Require a valid access-token cookie and load the user into ``g.current_user``.

    Usage:
        @bp.get('/me')
        @login_required
        def me():
            user = g.current_user
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        user = _current_user()
        if user is None:
            return jsonify({"error": "User not found"}), 404
        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    """Like login_required, but the stored user role must be 'admin'."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        user = _current_user()
        if user is None or not user.is_admin:
            current_app.logger.warning(f"Non-admin identity {get_jwt_identity()} attempted admin route")
            return jsonify({"error": "Forbidden", "message": "Administrator role required"}), 403
        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function
