"""Tests for the flask CLI commands."""

from __future__ import annotations

from textwrap import dedent

import pytest

from gamematch.models import Component, Game, Genre, Manufacturer, RequirementSet, Tag, User


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def seed_dir(tmp_path):
    files = {
        "genres.csv": "name\nAction\nRPG\n",
        "platforms.csv": "name\nPC\n",
        "manufacturers.csv": "name\nIntel\nNVIDIA\n",
        "tags.csv": "name\nCo-op\nOpen World\n",
        "components.csv": """\
            name,type,manufacturer,benchmarkScore
            Core i5,CPU,Intel,5000
            Core i9,cpu,Intel,10000
            RTX 2070,GPU,NVIDIA,8000
        """,
        "games.csv": """\
            id,title,genre,platform,releaseYear
            g1,Starfall,Action,PC,2021
            g2,Deep Dungeon,RPG,PC,
        """,
        "requirements.csv": """\
            game_id,minCpu,minGpu,minRam,minVram,recCpu,recGpu,recRam,recVram
            g1,Core i5,RTX 2070,8,2048,Core i9,RTX 2070,16,4096
            g2,Core i5,RTX 2070,4,1024,Core i5,RTX 2070,8,2048
            g3,Core i5,RTX 2070,4,1024,Core i5,RTX 2070,8,2048
            g2,Pentium,RTX 2070,4,1024,Core i5,RTX 2070,8,2048
            g2,RTX 2070,RTX 2070,4,1024,Core i5,RTX 2070,8,2048
        """,
        "game_tags.csv": """\
            game_id,tag_name
            g1,Co-op
            g1,Open World
            g2,Stealth
        """,
    }
    for name, content in files.items():
        (tmp_path / name).write_text(dedent(content), encoding="utf-8")
    return tmp_path


def test_seed_catalog_loads_csv_files(runner, seed_dir) -> None:
    result = runner.invoke(args=["seed-catalog", "--dir", str(seed_dir)])

    assert result.exit_code == 0, result.output
    assert "Requirement sets: 2" in result.output
    assert "Skipped rows: 4" in result.output
    assert "Tags: 2" in result.output
    assert Genre.query.count() == 2
    assert Component.query.filter_by(name="Core i9").one().kind.value == "CPU"
    assert Game.query.filter_by(title="Deep Dungeon").one().release_year is None
    assert RequirementSet.query.count() == 2
    assert sorted(t.name for t in Game.query.filter_by(title="Starfall").one().tags) == ["Co-op", "Open World"]


def test_seed_catalog_reuses_named_rows(runner, seed_dir) -> None:
    runner.invoke(args=["seed-catalog", "--dir", str(seed_dir)])
    runner.invoke(args=["seed-catalog", "--dir", str(seed_dir)])

    assert Manufacturer.query.count() == 2
    assert Tag.query.count() == 2
    assert Component.query.count() == 3


def test_seed_catalog_tolerates_missing_files(runner, tmp_path) -> None:
    result = runner.invoke(args=["seed-catalog", "--dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert Game.query.count() == 0


def test_create_admin(runner, app) -> None:
    result = runner.invoke(args=["create-admin", "Boss@Example.com", "--password", "long-password"])

    assert result.exit_code == 0, result.output
    admin = User.query.filter_by(email="boss@example.com").one()
    assert admin.is_admin
    assert admin.check_password("long-password")

    again = runner.invoke(args=["create-admin", "boss@example.com", "--password", "long-password"])
    assert "already exists" in again.output
    assert User.query.count() == 1


def test_create_admin_rejects_short_password(runner, app) -> None:
    result = runner.invoke(args=["create-admin", "boss@example.com", "--password", "123"])

    assert result.exit_code == 1
    assert User.query.count() == 0


def test_clear_db(runner, catalog) -> None:
    aborted = runner.invoke(args=["clear-db"], input="n\n")
    assert "Aborted" in aborted.output
    assert Game.query.count() == 2

    result = runner.invoke(args=["clear-db", "--yes"])

    assert result.exit_code == 0, result.output
    assert Game.query.count() == 0
    assert RequirementSet.query.count() == 0
    assert Component.query.count() == 0


def test_match_games_prints_ranking(runner, catalog) -> None:
    result = runner.invoke(args=[
        "match-games", "--ram", "16", "--vram", "4096",
        "--cpu-id", str(catalog.cpu_mid.id), "--gpu-id", str(catalog.gpu_mid.id),
    ])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    baseline = next(i for i, line in enumerate(lines) if "Baseline" in line)
    demanding = next(i for i, line in enumerate(lines) if "Demanding" in line)
    assert baseline < demanding
    assert "Total: 2 game(s)" in result.output
    assert "Filtered by: RAM 0" in result.output


def test_match_games_reports_no_match(runner, catalog) -> None:
    result = runner.invoke(args=["match-games", "--ram", "2", "--vram", "4096"])

    assert result.exit_code == 0, result.output
    assert "No games match this hardware." in result.output
    assert "Filtered by: RAM 2" in result.output


def test_match_games_rejects_negative_memory(runner, catalog) -> None:
    result = runner.invoke(args=["match-games", "--ram=-1", "--vram", "4096"])

    assert result.exit_code == 2


def test_match_games_rejects_component_of_wrong_kind(runner, catalog) -> None:
    result = runner.invoke(args=["match-games", "--ram", "16", "--vram", "4096", "--cpu-id", str(catalog.gpu_mid.id)])

    assert result.exit_code == 2
