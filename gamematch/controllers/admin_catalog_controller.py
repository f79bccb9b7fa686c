# gamematch/controllers/admin_catalog_controller.py
from flask import Blueprint, jsonify, request
from gamematch.middleware.auth_guard import admin_required
from gamematch.middleware.error_guard import service_errors
from gamematch.services.catalog_service import CatalogService

bp_admin_catalog = Blueprint('admin_catalog', __name__, url_prefix='/api/admin')


# ── Components ───────────────────────────────────────────────────────────────

@bp_admin_catalog.get('/components')
@admin_required
@service_errors
def list_components():
    components = CatalogService.list_components(kind=request.args.get('kind'))
    return jsonify([c.to_dict() for c in components]), 200


@bp_admin_catalog.post('/components')
@admin_required
@service_errors
def create_component():
    component = CatalogService.create_component(request.get_json(silent=True) or {})
    return jsonify({'message': 'Component created', 'component': component.to_dict()}), 201


@bp_admin_catalog.put('/components/<int:component_id>')
@admin_required
@service_errors
def update_component(component_id):
    component = CatalogService.update_component(component_id, request.get_json(silent=True) or {})
    return jsonify({'message': 'Component updated', 'component': component.to_dict()}), 200


@bp_admin_catalog.delete('/components/<int:component_id>')
@admin_required
@service_errors
def delete_component(component_id):
    CatalogService.delete_component(component_id)
    return jsonify({'message': 'Component deleted'}), 200


# ── Genres / platforms / tags / manufacturers ────────────────────────────────

@bp_admin_catalog.get('/<any(genres, platforms, tags, manufacturers):kind>')
@admin_required
@service_errors
def list_named(kind):
    model = CatalogService.named_model(kind)
    return jsonify([item.to_dict() for item in CatalogService.list_named(model)]), 200


@bp_admin_catalog.post('/<any(genres, platforms, tags, manufacturers):kind>')
@admin_required
@service_errors
def create_named(kind):
    model = CatalogService.named_model(kind)
    item = CatalogService.create_named(model, (request.get_json(silent=True) or {}).get('name'))
    return jsonify({'message': f'{model.__name__} created successfully', 'item': item.to_dict()}), 201


@bp_admin_catalog.put('/<any(genres, platforms, tags, manufacturers):kind>/<int:item_id>')
@admin_required
@service_errors
def rename_named(kind, item_id):
    model = CatalogService.named_model(kind)
    item = CatalogService.rename_named(model, item_id, (request.get_json(silent=True) or {}).get('name'))
    return jsonify({'message': f'{model.__name__} updated successfully', 'item': item.to_dict()}), 200


@bp_admin_catalog.delete('/<any(genres, platforms, tags, manufacturers):kind>/<int:item_id>')
@admin_required
@service_errors
def delete_named(kind, item_id):
    model = CatalogService.named_model(kind)
    CatalogService.delete_named(model, item_id)
    return jsonify({'message': f'{model.__name__} deleted successfully'}), 200
