from flask import Blueprint, request, jsonify, current_app, g
from gamematch.middleware.auth_guard import login_required
from gamematch.middleware.error_guard import service_errors
from gamematch.services.match_input import optional_id, optional_ratio, parse_match_input
from gamematch.services.match_service import MatchService
from gamematch.services.payload_formatters import format_match_response
from gamematch.services.user_service import get_hardware_profile

bp_match = Blueprint('match', __name__, url_prefix='/api')


@bp_match.post('/match')
@service_errors
def match_games():
    """
    Body: {cpuId?, gpuId?, ram (GB), vram (MB), minPerformanceRatio?, genreId?}
    An empty 'games' list means nothing fits; malformed input is a 400.
    """
    match_input = parse_match_input(
        request.get_json(silent=True),
        default_min_ratio=current_app.config.get('MATCH_DEFAULT_MIN_RATIO', 0.0)
    )
    outcome = MatchService.from_app().match(match_input)
    return jsonify(format_match_response(outcome, match_input)), 200


@bp_match.get('/games/hardware')
@login_required
@service_errors
def games_for_my_hardware():
    """Run the matcher against the caller's stored hardware profile."""
    profile = get_hardware_profile(g.current_user.id)
    if not profile:
        return jsonify({"games": [], "count": 0, "message": "No hardware profile saved"}), 200

    match_input = MatchService.input_for_profile(
        profile,
        min_performance_ratio=optional_ratio(
            request.args.get('minPerformanceRatio'), 'minPerformanceRatio',
            default=current_app.config.get('MATCH_DEFAULT_MIN_RATIO', 0.0)
        ),
        genre_id=optional_id(request.args.get('genreId'), 'genreId'),
    )
    outcome = MatchService.from_app().match(match_input)
    return jsonify(format_match_response(outcome, match_input)), 200
