# gamematch/services/catalog_reader.py
"""
Catalog access for the matching engine.

Readers return an immutable CatalogSnapshot; the engine never sees ORM rows
or a session.
"""
import logging

from sqlalchemy.orm import joinedload, selectinload

from gamematch.extension.extensions import db
from gamematch.models.component import Component
from gamematch.models.game import Game
from gamematch.services.matching_engine import (
    CatalogSnapshot, ComponentSnapshot, GameSnapshot, RequirementSnapshot
)

logger = logging.getLogger(__name__)


class CatalogReader:
    """Anything that can hand the engine a catalog snapshot."""

    def load_catalog(self, genre_id=None) -> CatalogSnapshot:
        raise NotImplementedError


class StaticCatalogReader(CatalogReader):
    """Serves a prebuilt snapshot (CLI dry runs, tests)."""

    def __init__(self, snapshot: CatalogSnapshot):
        self.snapshot = snapshot

    def load_catalog(self, genre_id=None) -> CatalogSnapshot:
        return self.snapshot


def snapshot_component(component: Component) -> ComponentSnapshot:
    return ComponentSnapshot(
        id=component.id,
        name=component.name,
        kind=component.kind.value if component.kind else None,
        benchmark_score=component.benchmark_score,
    )


class SqlAlchemyCatalogReader(CatalogReader):
    """One bulk read of games, requirement sets and components."""

    def __init__(self, session=None):
        self.session = session or db.session

    def load_catalog(self, genre_id=None) -> CatalogSnapshot:
        components = {
            c.id: snapshot_component(c)
            for c in self.session.query(Component).all()
        }

        query = self.session.query(Game).options(
            joinedload(Game.genre),
            joinedload(Game.platform),
            selectinload(Game.tags),
            selectinload(Game.requirements),
        )
        if genre_id is not None:
            query = query.filter(Game.genre_id == genre_id)

        games = []
        for game in query.order_by(Game.id.asc()).all():
            games.append(GameSnapshot(
                id=game.id,
                title=game.title,
                release_year=game.release_year,
                genre_id=game.genre_id,
                requirements=tuple(
                    RequirementSnapshot(
                        id=req.id,
                        # dangling ids resolve to None and the engine skips the set
                        min_cpu=components.get(req.min_cpu_id),
                        min_gpu=components.get(req.min_gpu_id),
                        rec_cpu=components.get(req.rec_cpu_id),
                        rec_gpu=components.get(req.rec_gpu_id),
                        min_ram=req.min_ram,
                        min_vram=req.min_vram,
                        rec_ram=req.rec_ram,
                        rec_vram=req.rec_vram,
                    )
                    for req in game.requirements
                ),
                payload=game.to_dict(),
            ))

        logger.debug("Loaded catalog snapshot: %d games, %d components", len(games), len(components))
        return CatalogSnapshot(games=tuple(games), components=components)
