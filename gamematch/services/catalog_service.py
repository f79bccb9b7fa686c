# gamematch/services/catalog_service.py
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from gamematch.extension.extensions import db
from gamematch.models.component import Component, ComponentKind
from gamematch.models.game import Game
from gamematch.models.genre import Genre
from gamematch.models.hardwareProfile import HardwareProfile
from gamematch.models.manufacturer import Manufacturer
from gamematch.models.platform import Platform
from gamematch.models.requirement import RequirementSet
from gamematch.models.tag import Tag
from gamematch.services.exceptions import CatalogError

# url segment -> model for the simple name-only catalog tables
NAMED_MODELS = {
    'genres': Genre,
    'platforms': Platform,
    'tags': Tag,
    'manufacturers': Manufacturer,
}


def parse_int(data, key, required=True, positive=True):
    """Read an integer field from a JSON payload, accepting numeric strings."""
    value = data.get(key)
    if value is None or value == "":
        if required:
            raise CatalogError(f"{key} is required", 400)
        return None
    if isinstance(value, bool):
        raise CatalogError(f"{key} must be an integer", 400)
    try:
        number = int(str(value).strip())
    except ValueError:
        raise CatalogError(f"{key} must be an integer", 400)
    if positive and number <= 0:
        raise CatalogError(f"{key} must be positive", 400)
    return number


def parse_amount(data, key):
    """Non-negative RAM/VRAM amount."""
    value = data.get(key)
    if value is None or value == "" or isinstance(value, bool):
        raise CatalogError(f"{key} is required", 400)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise CatalogError(f"{key} must be a number", 400)
    if number < 0:
        raise CatalogError(f"{key} must not be negative", 400)
    return number


def _clean_name(name):
    name = (name or "").strip() if isinstance(name, str) else ""
    if not name:
        raise CatalogError("Name is required", 400)
    return name


def commit_or_conflict():
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise CatalogError("Conflicts with existing catalog data", 409)


class CatalogService:
    @staticmethod
    def named_model(kind):
        model = NAMED_MODELS.get(kind)
        if model is None:
            raise CatalogError(f"Unknown catalog section '{kind}'", 404)
        return model

    @staticmethod
    def list_named(model):
        return model.query.order_by(model.name.asc()).all()

    @staticmethod
    def _find_duplicate(model, name, exclude_id=None):
        query = model.query.filter(func.lower(model.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return query.first()

    @staticmethod
    def get_named(model, item_id):
        item = db.session.get(model, item_id)
        if not item:
            raise CatalogError(f"{model.__name__} not found", 404)
        return item

    @staticmethod
    def create_named(model, name):
        name = _clean_name(name)
        if CatalogService._find_duplicate(model, name):
            raise CatalogError(f"{model.__name__} with this name already exists", 409)
        item = model(name=name)
        db.session.add(item)
        commit_or_conflict()
        return item

    @staticmethod
    def rename_named(model, item_id, name):
        item = CatalogService.get_named(model, item_id)
        name = _clean_name(name)
        if CatalogService._find_duplicate(model, name, exclude_id=item.id):
            raise CatalogError(f"{model.__name__} with this name already exists", 409)
        item.name = name
        commit_or_conflict()
        return item

    @staticmethod
    def delete_named(model, item_id):
        item = CatalogService.get_named(model, item_id)

        if model is Genre and Game.query.filter_by(genre_id=item.id).first():
            raise CatalogError("Cannot delete genre: it is used by one or more games", 409)
        if model is Platform and Game.query.filter_by(platform_id=item.id).first():
            raise CatalogError("Cannot delete platform: it is used by one or more games", 409)
        if model is Manufacturer and Component.query.filter_by(manufacturer_id=item.id).first():
            raise CatalogError("Cannot delete manufacturer: it still has components", 409)
        if model is Tag:
            # drop game associations first
            item.games = []

        db.session.delete(item)
        commit_or_conflict()

    # ── Components ──────────────────────────────────────────────────────────

    @staticmethod
    def parse_kind(value):
        try:
            return ComponentKind(str(value).strip().upper())
        except ValueError:
            raise CatalogError("kind must be CPU or GPU", 400)

    @staticmethod
    def list_components(kind=None):
        query = Component.query
        if kind:
            query = query.filter(Component.kind == CatalogService.parse_kind(kind))
        return query.order_by(Component.name.asc()).all()

    @staticmethod
    def get_component(component_id):
        component = db.session.get(Component, component_id)
        if not component:
            raise CatalogError("Component not found", 404)
        return component

    @staticmethod
    def require_component(component_id, kind, field):
        """Resolve a component id and make sure it is of the expected kind."""
        component = db.session.get(Component, component_id)
        if not component:
            raise CatalogError(f"{field} does not reference an existing component", 400)
        if component.kind != kind:
            raise CatalogError(f"{field} must reference a {kind.value}", 400)
        return component

    @staticmethod
    def _component_fields(data):
        name = _clean_name(data.get('name'))
        kind = CatalogService.parse_kind(data.get('kind') or data.get('type'))
        manufacturer_id = parse_int(data, 'manufacturerId')
        if not db.session.get(Manufacturer, manufacturer_id):
            raise CatalogError("Manufacturer not found", 400)
        benchmark = parse_int(data, 'benchmarkScore')
        return name, kind, manufacturer_id, benchmark

    @staticmethod
    def create_component(data):
        name, kind, manufacturer_id, benchmark = CatalogService._component_fields(data)
        component = Component(name=name, kind=kind, manufacturer_id=manufacturer_id, benchmark_score=benchmark)
        db.session.add(component)
        commit_or_conflict()
        return component

    @staticmethod
    def update_component(component_id, data):
        component = CatalogService.get_component(component_id)
        name, kind, manufacturer_id, benchmark = CatalogService._component_fields(data)
        component.name = name
        component.kind = kind
        component.manufacturer_id = manufacturer_id
        component.benchmark_score = benchmark
        commit_or_conflict()
        return component

    @staticmethod
    def delete_component(component_id):
        component = CatalogService.get_component(component_id)
        cid = component.id
        in_requirements = RequirementSet.query.filter(or_(
            RequirementSet.min_cpu_id == cid, RequirementSet.min_gpu_id == cid,
            RequirementSet.rec_cpu_id == cid, RequirementSet.rec_gpu_id == cid
        )).first()
        in_profiles = HardwareProfile.query.filter(or_(
            HardwareProfile.cpu_id == cid, HardwareProfile.gpu_id == cid
        )).first()
        if in_requirements or in_profiles:
            raise CatalogError("Cannot delete component: it is referenced by requirements or profiles", 409)
        db.session.delete(component)
        commit_or_conflict()
