# gamematch/services/match_input.py
"""
Normalizes raw match parameters (JSON body, query string, CLI options) into a
strict MatchInput before the engine ever sees them.
"""
import math
from typing import Any, Mapping, Optional

from gamematch.services.exceptions import InvalidInput
from gamematch.services.matching_engine import MatchInput

_ABSENT = ("", "null", "undefined", "none")


def _pick(payload: Mapping[str, Any], *keys):
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _is_absent(value):
    return value is None or (isinstance(value, str) and value.strip().lower() in _ABSENT)


def _to_float(value, field):
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number", field=field)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidInput(f"{field} must be a number", field=field)
    else:
        raise InvalidInput(f"{field} must be a number", field=field)
    if not math.isfinite(number):
        raise InvalidInput(f"{field} must be a finite number", field=field)
    return number


def optional_id(value, field) -> Optional[int]:
    """
    Accept an id given as int, numeric string or integral float.

    Missing, empty and zero ids count as "not specified".
    """
    if _is_absent(value):
        return None
    number = _to_float(value, field)
    if not number.is_integer():
        raise InvalidInput(f"{field} must be an integer id", field=field)
    if number < 0:
        raise InvalidInput(f"{field} must not be negative", field=field)
    return int(number) or None


def required_amount(value, field) -> float:
    if _is_absent(value):
        raise InvalidInput(f"{field} is required", field=field)
    number = _to_float(value, field)
    if number < 0:
        raise InvalidInput(f"{field} must not be negative", field=field)
    return number


def optional_ratio(value, field, default=0.0) -> float:
    if _is_absent(value):
        return float(default)
    number = _to_float(value, field)
    if number < 0:
        raise InvalidInput(f"{field} must not be negative", field=field)
    return number


def parse_match_input(payload: Optional[Mapping[str, Any]], default_min_ratio=0.0) -> MatchInput:
    """Build a MatchInput from camelCase or snake_case request fields."""
    if payload is None:
        raise InvalidInput("ram and vram are required")
    if not isinstance(payload, Mapping):
        raise InvalidInput("match parameters must be a JSON object")

    return MatchInput(
        ram=required_amount(_pick(payload, "ram"), "ram"),
        vram=required_amount(_pick(payload, "vram"), "vram"),
        cpu_id=optional_id(_pick(payload, "cpuId", "cpu_id"), "cpuId"),
        gpu_id=optional_id(_pick(payload, "gpuId", "gpu_id"), "gpuId"),
        min_performance_ratio=optional_ratio(
            _pick(payload, "minPerformanceRatio", "min_performance_ratio"),
            "minPerformanceRatio",
            default=default_min_ratio
        ),
        genre_id=optional_id(_pick(payload, "genreId", "genre_id"), "genreId"),
    )
