from flask import Blueprint, request, jsonify, current_app, g
from flask_jwt_extended import (
    create_access_token, create_refresh_token, jwt_required, get_jwt, get_jwt_identity,
    set_access_cookies, set_refresh_cookies, unset_jwt_cookies
)
from gamematch.middleware.auth_guard import login_required
from gamematch.middleware.error_guard import service_errors
from gamematch.services.user_service import register_user, authenticate

bp_auth = Blueprint('auth', __name__, url_prefix='/api/auth')


def _claims(user):
    return {"email": user.email, "role": user.role}


@bp_auth.post('/register')
@service_errors
def register():
    data = request.get_json(silent=True) or {}
    user = register_user(data.get('email'), data.get('password'), name=data.get('name'))
    return jsonify(user.to_dict()), 201


@bp_auth.post('/login')
@service_errors
def login():
    data = request.get_json(silent=True) or {}
    if not data.get('email') or not data.get('password'):
        return jsonify({"error": "Email and password are required"}), 400

    user = authenticate(data['email'], data['password'])
    if not user:
        return jsonify({"error": "Invalid email or password"}), 401

    response = jsonify(user.to_dict())
    set_access_cookies(response, create_access_token(identity=str(user.id), additional_claims=_claims(user)))
    set_refresh_cookies(response, create_refresh_token(identity=str(user.id), additional_claims=_claims(user)))
    current_app.logger.info(f"User {user.id} logged in")
    return response, 200


@bp_auth.post('/logout')
def logout():
    response = jsonify({"message": "Logged out"})
    unset_jwt_cookies(response)
    return response, 200


@bp_auth.post('/refresh')
@jwt_required(refresh=True)
def refresh():
    claims = get_jwt()
    access_token = create_access_token(
        identity=get_jwt_identity(),
        additional_claims={"email": claims.get("email"), "role": claims.get("role")}
    )
    response = jsonify({"refreshed": True})
    set_access_cookies(response, access_token)
    return response, 200


@bp_auth.get('/me')
@login_required
def me():
    return jsonify(g.current_user.to_dict()), 200
