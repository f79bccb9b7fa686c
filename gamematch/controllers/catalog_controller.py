from flask import Blueprint, request, jsonify, current_app
from gamematch.middleware.error_guard import service_errors
from gamematch.models.genre import Genre
from gamematch.models.platform import Platform
from gamematch.services.catalog_service import CatalogService
from gamematch.services.game_service import GameService

bp_catalog = Blueprint('catalog', __name__, url_prefix='/api')


@bp_catalog.get('/components')
@service_errors
def list_components():
    components = CatalogService.list_components(kind=request.args.get('kind'))
    return jsonify([c.to_dict() for c in components]), 200


@bp_catalog.get('/genres')
@service_errors
def list_genres():
    return jsonify([g.to_dict() for g in CatalogService.list_named(Genre)]), 200


@bp_catalog.get('/platforms')
@service_errors
def list_platforms():
    return jsonify([p.to_dict() for p in CatalogService.list_named(Platform)]), 200


@bp_catalog.get('/games/<int:game_id>')
@service_errors
def get_game(game_id):
    game = GameService.get_game(game_id)
    return jsonify(game.to_dict(include_requirements=True)), 200


@bp_catalog.get('/games/search')
@service_errors
def search_games():
    limit = current_app.config.get('SEARCH_RESULT_LIMIT', 100)
    games = GameService.search_games(request.args.get('q', ''), limit=limit)
    return jsonify([{"id": game.id, "title": game.title} for game in games]), 200
