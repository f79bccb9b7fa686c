# gamematch/services/user_service.py
import re

from flask import current_app
from sqlalchemy import func

from gamematch.extension.extensions import db
from gamematch.models.component import ComponentKind
from gamematch.models.hardwareProfile import HardwareProfile
from gamematch.models.user import User
from gamematch.services.catalog_service import CatalogService, commit_or_conflict, parse_amount, parse_int
from gamematch.services.exceptions import CatalogError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def _normalize_email(email):
    return (email or "").strip().lower() if isinstance(email, str) else ""


def find_user_by_email(email):
    return User.query.filter(func.lower(User.email) == _normalize_email(email)).first()


def register_user(email, password, name=None, role='user'):
    email = _normalize_email(email)
    if not email or not password:
        raise CatalogError("Email and password are required", 400)
    if not EMAIL_RE.match(email):
        raise CatalogError("Invalid email address", 400)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise CatalogError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", 400)
    if find_user_by_email(email):
        raise CatalogError("User already exists", 409)

    user = User(email=email, name=(name or None), role=role)
    user.set_password(password)
    db.session.add(user)
    commit_or_conflict()
    current_app.logger.info(f"Registered {role} {user.id} <{email}>")
    return user


def authenticate(email, password):
    """Return the user for valid credentials, None otherwise."""
    if not email or not password:
        return None
    user = find_user_by_email(email)
    if not user or not user.check_password(password):
        return None
    return user


def get_user(user_id):
    return db.session.get(User, user_id)


# ── Hardware profiles ────────────────────────────────────────────────────────

def get_hardware_profile(user_id):
    return HardwareProfile.query.filter_by(user_id=user_id).first()


def _profile_fields(data):
    cpu_id = parse_int(data, 'cpuId')
    gpu_id = parse_int(data, 'gpuId')
    CatalogService.require_component(cpu_id, ComponentKind.CPU, 'cpuId')
    CatalogService.require_component(gpu_id, ComponentKind.GPU, 'gpuId')
    ram = parse_amount(data, 'ram')
    vram = parse_amount(data, 'vram')
    if ram <= 0 or vram <= 0:
        raise CatalogError("ram and vram must be positive", 400)
    return cpu_id, gpu_id, ram, vram


def save_hardware_profile(user_id, data, must_exist=False):
    """
    Create-or-update the single hardware profile of a user.
    Returns (profile, created).
    """
    if not isinstance(data, dict):
        raise CatalogError("Invalid input data", 400)
    cpu_id, gpu_id, ram, vram = _profile_fields(data)

    profile = get_hardware_profile(user_id)
    if profile is None and must_exist:
        raise CatalogError("Hardware profile not found. Use POST to create a new one.", 404)

    created = profile is None
    if created:
        profile = HardwareProfile(user_id=user_id)
        db.session.add(profile)

    profile.cpu_id = cpu_id
    profile.gpu_id = gpu_id
    profile.ram = ram
    profile.vram = vram
    commit_or_conflict()
    return profile, created
