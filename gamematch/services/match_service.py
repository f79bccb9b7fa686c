# gamematch/services/match_service.py
import logging
import time

from flask import current_app

from gamematch.services.catalog_reader import SqlAlchemyCatalogReader
from gamematch.services.matching_engine import MatchInput, RequirementPolicy, evaluate

logger = logging.getLogger(__name__)


class MatchService:
    """Reads the catalog through an injected reader and runs the engine on it."""

    def __init__(self, reader, policy=RequirementPolicy.BEST):
        self.reader = reader
        self.policy = RequirementPolicy.from_value(policy)

    @classmethod
    def from_app(cls):
        """Service wired to the current app's database session and config."""
        return cls(
            SqlAlchemyCatalogReader(),
            policy=current_app.config.get("MATCH_REQUIREMENT_POLICY", RequirementPolicy.BEST.value)
        )

    def match(self, match_input: MatchInput):
        started = time.perf_counter()
        catalog = self.reader.load_catalog(genre_id=match_input.genre_id)
        outcome = evaluate(match_input, catalog, policy=self.policy)
        elapsed_ms = (time.perf_counter() - started) * 1000

        stats = outcome.stats
        logger.info(
            "match cpu=%s gpu=%s ram=%s vram=%s floor=%s genre=%s policy=%s -> %d games in %.1fms "
            "(passed minimum %d; filtered ram=%d vram=%d cpu=%d gpu=%d performance=%d; integrity errors %d)",
            match_input.cpu_id, match_input.gpu_id, match_input.ram, match_input.vram,
            match_input.min_performance_ratio, match_input.genre_id, self.policy.value,
            stats.matched, elapsed_ms, stats.passed_minimum,
            stats.filtered_by_ram, stats.filtered_by_vram, stats.filtered_by_cpu,
            stats.filtered_by_gpu, stats.filtered_by_performance, stats.integrity_errors
        )
        return outcome

    @staticmethod
    def input_for_profile(profile, min_performance_ratio=0.0, genre_id=None) -> MatchInput:
        """MatchInput describing a stored HardwareProfile."""
        return MatchInput(
            ram=float(profile.ram),
            vram=float(profile.vram),
            cpu_id=profile.cpu_id,
            gpu_id=profile.gpu_id,
            min_performance_ratio=min_performance_ratio,
            genre_id=genre_id,
        )
