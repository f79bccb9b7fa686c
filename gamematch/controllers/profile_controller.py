from flask import Blueprint, request, jsonify, g
from gamematch.middleware.auth_guard import login_required
from gamematch.middleware.error_guard import service_errors
from gamematch.services.user_service import get_hardware_profile, save_hardware_profile

bp_profile = Blueprint('profile', __name__, url_prefix='/api/profile')


@bp_profile.get('/hardware')
@login_required
def get_hardware():
    profile = get_hardware_profile(g.current_user.id)
    if not profile:
        return jsonify({"error": "Hardware profile not found"}), 404
    return jsonify(profile.to_dict()), 200


@bp_profile.post('/hardware')
@login_required
@service_errors
def save_hardware():
    """Create the profile, or overwrite the existing one."""
    profile, created = save_hardware_profile(g.current_user.id, request.get_json(silent=True))
    return jsonify(profile.to_dict()), 201 if created else 200


@bp_profile.put('/hardware')
@login_required
@service_errors
def update_hardware():
    profile, _ = save_hardware_profile(g.current_user.id, request.get_json(silent=True), must_exist=True)
    return jsonify(profile.to_dict()), 200
