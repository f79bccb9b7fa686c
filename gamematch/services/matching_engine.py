"""
services/matching_engine.py – ranks catalog games against a hardware descriptor.

The engine is a pure function over a catalog snapshot: it never touches the
database or the Flask app. Each requirement set of a game is checked against
its *minimum* tier (hard gate), then the user's hardware is compared with the
*recommended* tier. The weakest resource decides the performance ratio, which
is mapped onto a three-tier ranking score.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from gamematch.services.exceptions import DataIntegrityError, InvalidInput

logger = logging.getLogger(__name__)

# Score tiers: >= 2 exceeds recommended, 1..2 near recommended, < 1 minimum only
RECOMMENDED_RATIO = 1.0
NEAR_RECOMMENDED_RATIO = 0.8
HEADROOM_BONUS = 0.5


class RequirementPolicy(str, enum.Enum):
    """How the engine walks a game's requirement sets."""

    BEST = "best"             # evaluate every set, keep the best passing one
    FIRST_ELIGIBLE = "first"  # stop at the first set clearing the minimum gate

    @classmethod
    def from_value(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidInput(
                f"Unknown requirement policy {value!r}; expected one of: "
                f"{', '.join(p.value for p in cls)}",
                field="policy"
            )


# ── Catalog snapshot ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ComponentSnapshot:
    id: int
    name: str
    kind: str
    benchmark_score: int


@dataclass(frozen=True)
class RequirementSnapshot:
    """
    One minimum + recommended specification of a game.

    A component reference of ``None`` means the catalog could not resolve it;
    the engine treats such a set as unusable.
    """

    id: int
    min_cpu: Optional[ComponentSnapshot]
    min_gpu: Optional[ComponentSnapshot]
    rec_cpu: Optional[ComponentSnapshot]
    rec_gpu: Optional[ComponentSnapshot]
    min_ram: float
    min_vram: float
    rec_ram: float
    rec_vram: float


@dataclass(frozen=True)
class GameSnapshot:
    id: int
    title: str
    release_year: Optional[int] = None
    genre_id: Optional[int] = None
    requirements: Tuple[RequirementSnapshot, ...] = ()
    # full catalog data handed back to the caller with each result
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class CatalogSnapshot:
    games: Tuple[GameSnapshot, ...] = ()
    components: Mapping[int, ComponentSnapshot] = field(default_factory=dict, compare=False, hash=False)


# ── Input / output ───────────────────────────────────────────────────────────


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class MatchInput:
    """
    Normalized hardware descriptor plus filters.

    ``ram`` is in GB and ``vram`` in MB. Omitted ``cpu_id``/``gpu_id`` make that
    resource a non-factor.
    """

    ram: float
    vram: float
    cpu_id: Optional[int] = None
    gpu_id: Optional[int] = None
    min_performance_ratio: float = 0.0
    genre_id: Optional[int] = None

    def __post_init__(self):
        for name in ("ram", "vram"):
            value = getattr(self, name)
            if value is None:
                raise InvalidInput(f"{name} is required", field=name)
            if not _is_number(value) or not math.isfinite(value):
                raise InvalidInput(f"{name} must be a number", field=name)
            if value < 0:
                raise InvalidInput(f"{name} must not be negative", field=name)

        ratio = self.min_performance_ratio
        if not _is_number(ratio) or not math.isfinite(ratio) or ratio < 0:
            raise InvalidInput("minPerformanceRatio must be a non-negative number",
                               field="min_performance_ratio")

        for name in ("cpu_id", "gpu_id", "genre_id"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise InvalidInput(f"{name} must be an integer id", field=name)


@dataclass(frozen=True)
class MatchResult:
    game: GameSnapshot
    score: float
    performance_ratio: float
    requirement_id: int


@dataclass
class MatchStats:
    """Counters describing why games were kept or dropped."""

    games_considered: int = 0
    requirement_sets_checked: int = 0
    passed_minimum: int = 0
    filtered_by_ram: int = 0
    filtered_by_vram: int = 0
    filtered_by_cpu: int = 0
    filtered_by_gpu: int = 0
    filtered_by_performance: int = 0
    integrity_errors: int = 0
    matched: int = 0

    def record_gate(self, gate):
        attr = f"filtered_by_{gate}"
        setattr(self, attr, getattr(self, attr) + 1)


@dataclass(frozen=True)
class MatchOutcome:
    results: Tuple[MatchResult, ...]
    stats: MatchStats

    @property
    def is_empty(self):
        return not self.results


# ── Scoring primitives ───────────────────────────────────────────────────────


def score_from_ratio(performance_ratio: float) -> float:
    """Map a performance ratio onto the three-tier ranking score."""
    if performance_ratio >= RECOMMENDED_RATIO:
        return 2 + (performance_ratio - RECOMMENDED_RATIO) * HEADROOM_BONUS
    if performance_ratio >= NEAR_RECOMMENDED_RATIO:
        return 1 + performance_ratio
    return performance_ratio


def _memory_ratio(user_value, recommended):
    # a zero recommendation can never be the bottleneck
    if recommended <= 0:
        return math.inf
    return user_value / recommended


def resource_ratios(req: RequirementSnapshot, match_input: MatchInput,
                    user_cpu_score: Optional[int], user_gpu_score: Optional[int]) -> Dict[str, float]:
    """Per-resource ratios of the user's hardware to the recommended tier."""
    cpu_ratio = 1.0 if user_cpu_score is None else user_cpu_score / req.rec_cpu.benchmark_score
    gpu_ratio = 1.0 if user_gpu_score is None else user_gpu_score / req.rec_gpu.benchmark_score
    return {
        "cpu": cpu_ratio,
        "gpu": gpu_ratio,
        "ram": _memory_ratio(match_input.ram, req.rec_ram),
        "vram": _memory_ratio(match_input.vram, req.rec_vram),
    }


def performance_ratio(req: RequirementSnapshot, match_input: MatchInput,
                      user_cpu_score: Optional[int], user_gpu_score: Optional[int]) -> float:
    return min(resource_ratios(req, match_input, user_cpu_score, user_gpu_score).values())


# requirement slot -> component kind it must reference
_COMPONENT_SLOTS = (("min_cpu", "CPU"), ("min_gpu", "GPU"), ("rec_cpu", "CPU"), ("rec_gpu", "GPU"))


def check_integrity(game: GameSnapshot, req: RequirementSnapshot):
    """Raise DataIntegrityError when a requirement set cannot be evaluated."""
    for name, kind in _COMPONENT_SLOTS:
        component = getattr(req, name)
        if component is None:
            raise DataIntegrityError(game.id, req.id, f"{name} does not resolve to a component")
        if component.kind != kind:
            raise DataIntegrityError(game.id, req.id, f"{name} references a {component.kind}, expected a {kind}")
        if component.benchmark_score is None or component.benchmark_score <= 0:
            raise DataIntegrityError(game.id, req.id, f"{name} has no positive benchmark score")
    for name in ("min_ram", "min_vram", "rec_ram", "rec_vram"):
        value = getattr(req, name)
        if value is None or value < 0:
            raise DataIntegrityError(game.id, req.id, f"{name} must be a non-negative number")


def failed_gate(req: RequirementSnapshot, match_input: MatchInput,
                user_cpu_score: Optional[int], user_gpu_score: Optional[int]) -> Optional[str]:
    """Name of the first minimum-tier gate the hardware fails, or None."""
    if match_input.ram < req.min_ram:
        return "ram"
    if match_input.vram < req.min_vram:
        return "vram"
    if user_cpu_score is not None and user_cpu_score < req.min_cpu.benchmark_score:
        return "cpu"
    if user_gpu_score is not None and user_gpu_score < req.min_gpu.benchmark_score:
        return "gpu"
    return None


def _user_score(component_id, kind, field_name, catalog: CatalogSnapshot):
    if component_id is None:
        return None
    component = catalog.components.get(component_id)
    if component is None:
        # unknown hardware fails every minimum gate of its kind
        logger.warning("%s id %s not found in catalog, treating its benchmark as 0", kind, component_id)
        return 0
    if component.kind != kind:
        raise InvalidInput(f"{field_name} must reference a {kind}, got {component.kind} {component.name!r}",
                           field=field_name)
    return component.benchmark_score


def _sort_key(result: MatchResult):
    return (-result.score, -(result.game.release_year or 0), result.game.id)


# ── Engine ───────────────────────────────────────────────────────────────────


def evaluate(match_input: MatchInput, catalog: CatalogSnapshot,
             policy=RequirementPolicy.BEST) -> MatchOutcome:
    """
    Rank every game of ``catalog`` that the described hardware can run.

    Results are ordered by descending score, then newest release first.
    An empty outcome is a valid answer, not an error.
    """
    if not isinstance(match_input, MatchInput):
        raise InvalidInput("match input must be a MatchInput")
    policy = RequirementPolicy.from_value(policy)

    stats = MatchStats()
    user_cpu_score = _user_score(match_input.cpu_id, "CPU", "cpu_id", catalog)
    user_gpu_score = _user_score(match_input.gpu_id, "GPU", "gpu_id", catalog)
    best: Dict[int, MatchResult] = {}

    for game in catalog.games:
        if match_input.genre_id is not None and game.genre_id != match_input.genre_id:
            continue
        stats.games_considered += 1

        for req in game.requirements:
            stats.requirement_sets_checked += 1
            try:
                check_integrity(game, req)
            except DataIntegrityError as exc:
                stats.integrity_errors += 1
                logger.warning("Skipping requirement set: %s", exc)
                continue

            gate = failed_gate(req, match_input, user_cpu_score, user_gpu_score)
            if gate is not None:
                stats.record_gate(gate)
                continue
            stats.passed_minimum += 1

            ratio = performance_ratio(req, match_input, user_cpu_score, user_gpu_score)
            if ratio < match_input.min_performance_ratio:
                stats.filtered_by_performance += 1
                if policy is RequirementPolicy.FIRST_ELIGIBLE:
                    break
                continue

            score = score_from_ratio(ratio)
            current = best.get(game.id)
            if current is None or score > current.score:
                best[game.id] = MatchResult(game=game, score=score,
                                            performance_ratio=ratio, requirement_id=req.id)

            if policy is RequirementPolicy.FIRST_ELIGIBLE:
                break

    results = tuple(sorted(best.values(), key=_sort_key))
    stats.matched = len(results)
    return MatchOutcome(results=results, stats=stats)
