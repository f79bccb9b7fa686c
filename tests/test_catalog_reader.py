"""Tests for the SQLAlchemy catalog reader and the match service on top of it."""

from __future__ import annotations

import logging

import pytest

from gamematch.models import Game, RequirementSet
from gamematch.services.catalog_reader import SqlAlchemyCatalogReader, StaticCatalogReader
from gamematch.services.match_service import MatchService
from gamematch.services.matching_engine import CatalogSnapshot, MatchInput, RequirementPolicy


def test_reader_builds_snapshot_with_resolved_components(catalog) -> None:
    snapshot = SqlAlchemyCatalogReader().load_catalog()

    assert [g.title for g in snapshot.games] == ["Baseline", "Demanding"]
    baseline = snapshot.games[0]
    assert baseline.release_year == 2020
    assert baseline.genre_id == catalog.action.id
    req = baseline.requirements[0]
    assert req.min_cpu.benchmark_score == 3000
    assert req.rec_cpu.benchmark_score == 5000
    assert req.rec_gpu.kind == "GPU"
    assert baseline.payload["genre"]["name"] == "Action"
    assert baseline.payload["tags"] == [{"id": catalog.coop.id, "name": "Co-op"}]
    assert set(snapshot.components) == {
        catalog.cpu_low.id, catalog.cpu_mid.id, catalog.cpu_high.id, catalog.gpu_low.id, catalog.gpu_mid.id
    }


def test_reader_filters_by_genre(catalog) -> None:
    snapshot = SqlAlchemyCatalogReader().load_catalog(genre_id=catalog.rpg.id)

    assert [g.title for g in snapshot.games] == ["Demanding"]


def test_dangling_component_reference_is_skipped(catalog, db, caplog) -> None:
    # SQLite does not enforce foreign keys here, so a broken row can exist
    broken = Game(title="Broken", release_year=2021, genre_id=catalog.action.id, platform_id=catalog.pc.id)
    broken.requirements = [RequirementSet(
        min_cpu_id=9999, min_gpu_id=catalog.gpu_low.id,
        rec_cpu_id=catalog.cpu_mid.id, rec_gpu_id=catalog.gpu_mid.id,
        min_ram=4, min_vram=1024, rec_ram=8, rec_vram=2048,
    )]
    db.session.add(broken)
    db.session.commit()

    service = MatchService(SqlAlchemyCatalogReader())
    with caplog.at_level(logging.WARNING):
        outcome = service.match(MatchInput(ram=16, vram=4096, cpu_id=catalog.cpu_mid.id, gpu_id=catalog.gpu_mid.id))

    assert "Broken" not in [r.game.title for r in outcome.results]
    assert [r.game.title for r in outcome.results] == ["Baseline", "Demanding"]
    assert outcome.stats.integrity_errors == 1
    assert "does not resolve" in caplog.text


def test_match_service_ranks_catalog(catalog) -> None:
    service = MatchService(SqlAlchemyCatalogReader(), policy="first")

    outcome = service.match(MatchInput(ram=16, vram=4096, cpu_id=catalog.cpu_mid.id, gpu_id=catalog.gpu_mid.id))

    assert service.policy is RequirementPolicy.FIRST_ELIGIBLE
    assert [(r.game.title, r.score) for r in outcome.results] == [
        ("Baseline", pytest.approx(2.0)),
        ("Demanding", pytest.approx(0.5)),
    ]


def test_match_service_from_app_uses_config(app) -> None:
    app.config["MATCH_REQUIREMENT_POLICY"] = "first"

    service = MatchService.from_app()

    assert service.policy is RequirementPolicy.FIRST_ELIGIBLE
    assert isinstance(service.reader, SqlAlchemyCatalogReader)


def test_input_for_profile_copies_hardware(catalog) -> None:
    class Profile:
        cpu_id = catalog.cpu_mid.id
        gpu_id = catalog.gpu_mid.id
        ram = 16
        vram = 8192

    match_input = MatchService.input_for_profile(Profile(), min_performance_ratio=0.5, genre_id=catalog.rpg.id)

    assert match_input == MatchInput(ram=16.0, vram=8192.0, cpu_id=catalog.cpu_mid.id, gpu_id=catalog.gpu_mid.id,
                                     min_performance_ratio=0.5, genre_id=catalog.rpg.id)


def test_static_reader_returns_snapshot() -> None:
    snapshot = CatalogSnapshot()

    outcome = MatchService(StaticCatalogReader(snapshot)).match(MatchInput(ram=8, vram=2048))

    assert outcome.is_empty
