# gamematch/controllers/admin_games_controller.py
from flask import Blueprint, jsonify, request
from gamematch.middleware.auth_guard import admin_required
from gamematch.middleware.error_guard import service_errors
from gamematch.services.game_service import GameService

bp_admin_games = Blueprint('admin_games', __name__, url_prefix='/api/admin/games')


@bp_admin_games.get('')
@admin_required
@service_errors
def list_games():
    games = GameService.get_all_games()
    return jsonify([game.to_dict(include_requirements=True) for game in games]), 200


@bp_admin_games.post('')
@admin_required
@service_errors
def create_game():
    """
    Create a game with one or more requirement sets.
    Body: {title, genreId, platformId, releaseYear?, tagIds?, imageUrl?,
           requirements: {minCpuId, minGpuId, minRam, minVram, recCpuId, recGpuId, recRam, recVram} | [...]}
    """
    game = GameService.create_game(request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Game created successfully',
        'game': game.to_dict(include_requirements=True)
    }), 201


@bp_admin_games.put('/<int:game_id>')
@admin_required
@service_errors
def update_game(game_id):
    game = GameService.update_game(game_id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Game updated successfully',
        'game': game.to_dict(include_requirements=True)
    }), 200


@bp_admin_games.delete('/<int:game_id>')
@admin_required
@service_errors
def delete_game(game_id):
    GameService.delete_game(game_id)
    return jsonify({'message': 'Game deleted successfully'}), 200


@bp_admin_games.post('/<int:game_id>/image')
@admin_required
@service_errors
def upload_game_image(game_id):
    if 'image' not in request.files or not request.files['image'].filename:
        return jsonify({'error': 'No image file provided'}), 400

    result = GameService.update_game_image(game_id, request.files['image'])
    if not result['success']:
        # storage side failure, the game itself is unchanged
        return jsonify({'error': result['error']}), 502
    return jsonify({'imageUrl': result['image_url']}), 200


@bp_admin_games.delete('/<int:game_id>/image')
@admin_required
@service_errors
def delete_game_image(game_id):
    result = GameService.delete_game_image(game_id)
    if not result['success']:
        return jsonify({'error': result['error']}), 400
    return jsonify({'message': 'Image deleted'}), 200
