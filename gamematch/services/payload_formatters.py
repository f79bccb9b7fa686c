# gamematch/services/payload_formatters.py
from dataclasses import asdict
from typing import Any, Dict, Optional

from gamematch.services.matching_engine import MatchInput, MatchOutcome, MatchResult, MatchStats

NO_MATCH_MESSAGE = "No games match the given hardware and filters"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def format_match_result(result: MatchResult) -> Dict[str, Any]:
    payload = dict(result.game.payload) if result.game.payload else {
        "id": result.game.id,
        "title": result.game.title,
        "releaseYear": result.game.release_year,
        "genreId": result.game.genre_id,
    }
    payload.update({
        "score": result.score,
        "performanceRatio": result.performance_ratio,
        "matchedRequirementId": result.requirement_id,
    })
    return payload


def format_match_stats(stats: MatchStats) -> Dict[str, int]:
    return {_camel(key): value for key, value in asdict(stats).items()}


def format_match_query(match_input: MatchInput) -> Dict[str, Any]:
    return {_camel(key): value for key, value in asdict(match_input).items()}


def format_match_response(outcome: MatchOutcome, match_input: Optional[MatchInput] = None) -> Dict[str, Any]:
    """
    Response body shared by every matching endpoint.
    Zero matches keep the same shape and add a message, they are not an error.
    """
    body = {
        "games": [format_match_result(r) for r in outcome.results],
        "count": len(outcome.results),
        "stats": format_match_stats(outcome.stats),
    }
    if match_input is not None:
        body["query"] = format_match_query(match_input)
    if outcome.is_empty:
        body["message"] = NO_MATCH_MESSAGE
    return body
