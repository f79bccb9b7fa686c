# gamematch/services/seed_service.py
"""
Loads the catalog from a directory of CSV files:

    genres.csv         name
    platforms.csv      name
    manufacturers.csv  name
    tags.csv           name
    components.csv     name,type,manufacturer,benchmarkScore
    games.csv          id,title,genre,platform,releaseYear[,imageUrl]
    requirements.csv   game_id,minCpu,minGpu,minRam,minVram,recCpu,recGpu,recRam,recVram
    game_tags.csv      game_id,tag_name

Rows are matched by name, so re-running the seed does not duplicate the
lookup tables. Requirement rows reference games by the CSV ``id`` column and
components by name; a requirement row whose CPU columns do not name CPUs (or
GPU columns GPUs) is skipped.
"""
import csv
import logging
import os

from gamematch.extension.extensions import db
from gamematch.models.component import Component, ComponentKind
from gamematch.models.game import Game
from gamematch.models.genre import Genre
from gamematch.models.hardwareProfile import HardwareProfile
from gamematch.models.manufacturer import Manufacturer
from gamematch.models.platform import Platform
from gamematch.models.requirement import RequirementSet
from gamematch.models.tag import Tag
from gamematch.models.user import User
from gamematch.models.game import game_tags

logger = logging.getLogger(__name__)

DEFAULT_BENCHMARK = 1000
# minCpu, minGpu, recCpu, recGpu
_REQUIREMENT_KINDS = [ComponentKind.CPU, ComponentKind.GPU, ComponentKind.CPU, ComponentKind.GPU]


def _read_csv(directory, filename):
    path = os.path.join(directory, filename)
    if not os.path.exists(path):
        logger.warning(f"Seed file missing, skipping: {path}")
        return []
    with open(path, newline='', encoding='utf-8') as fh:
        return [
            {k.strip(): (v or '').strip() for k, v in row.items() if k}
            for row in csv.DictReader(fh)
            if any((v or '').strip() for v in row.values())
        ]


def _get_or_create(model, name):
    item = model.query.filter_by(name=name).first()
    if item is None:
        item = model(name=name)
        db.session.add(item)
        db.session.flush()
    return item


def seed_catalog(directory):
    """Seed the catalog from CSV files; returns per-table counts."""
    counts = {'genres': 0, 'platforms': 0, 'manufacturers': 0, 'components': 0,
              'tags': 0, 'games': 0, 'requirements': 0, 'game_tags': 0, 'skipped': 0}

    genres = {}
    for row in _read_csv(directory, 'genres.csv'):
        genres[row['name']] = _get_or_create(Genre, row['name'])
        counts['genres'] += 1

    platforms = {}
    for row in _read_csv(directory, 'platforms.csv'):
        platforms[row['name']] = _get_or_create(Platform, row['name'])
        counts['platforms'] += 1

    manufacturers = {}
    for row in _read_csv(directory, 'manufacturers.csv'):
        manufacturers[row['name']] = _get_or_create(Manufacturer, row['name'])
        counts['manufacturers'] += 1

    tags = {}
    for row in _read_csv(directory, 'tags.csv'):
        tags[row['name']] = _get_or_create(Tag, row['name'])
        counts['tags'] += 1

    components = {c.name: c for c in Component.query.all()}
    for row in _read_csv(directory, 'components.csv'):
        if row['name'] in components:
            continue
        manufacturer = manufacturers.get(row['manufacturer']) or _get_or_create(Manufacturer, row['manufacturer'])
        component = Component(
            name=row['name'],
            kind=ComponentKind(row['type'].upper()),
            manufacturer_id=manufacturer.id,
            benchmark_score=int(row.get('benchmarkScore') or DEFAULT_BENCHMARK),
        )
        db.session.add(component)
        components[component.name] = component
        counts['components'] += 1
    db.session.flush()

    games = {}
    for row in _read_csv(directory, 'games.csv'):
        genre = genres.get(row['genre']) or _get_or_create(Genre, row['genre'])
        platform = platforms.get(row['platform']) or _get_or_create(Platform, row['platform'])
        game = Game(
            title=row['title'],
            genre_id=genre.id,
            platform_id=platform.id,
            release_year=int(row['releaseYear']) if row.get('releaseYear') else None,
            image_url=row.get('imageUrl') or None,
        )
        db.session.add(game)
        games[row.get('id') or row['title']] = game
        counts['games'] += 1
    db.session.flush()

    for row in _read_csv(directory, 'requirements.csv'):
        game = games.get(row['game_id'])
        refs = [components.get(row[key]) for key in ('minCpu', 'minGpu', 'recCpu', 'recGpu')]
        if game is None or None in refs:
            logger.warning(f"Skipping requirement row with unknown game or component: {row}")
            counts['skipped'] += 1
            continue
        if [c.kind for c in refs] != _REQUIREMENT_KINDS:
            logger.warning(f"Skipping requirement row with a component of the wrong kind: {row}")
            counts['skipped'] += 1
            continue
        min_cpu, min_gpu, rec_cpu, rec_gpu = refs
        db.session.add(RequirementSet(
            game_id=game.id,
            min_cpu_id=min_cpu.id,
            min_gpu_id=min_gpu.id,
            rec_cpu_id=rec_cpu.id,
            rec_gpu_id=rec_gpu.id,
            min_ram=float(row['minRam']),
            min_vram=float(row['minVram']),
            rec_ram=float(row['recRam']),
            rec_vram=float(row['recVram']),
        ))
        counts['requirements'] += 1

    for row in _read_csv(directory, 'game_tags.csv'):
        game = games.get(row['game_id'])
        tag = tags.get(row['tag_name']) or Tag.query.filter_by(name=row['tag_name']).first()
        if game is None or tag is None:
            logger.warning(f"Skipping game tag row with unknown game or tag: {row}")
            counts['skipped'] += 1
            continue
        if tag not in game.tags:
            game.tags.append(tag)
            counts['game_tags'] += 1

    db.session.commit()
    logger.info(f"Catalog seeded from {directory}: {counts}")
    return counts


def clear_database():
    """Delete every row, dependent tables first."""
    db.session.execute(game_tags.delete())
    for model in (RequirementSet, HardwareProfile, Game, Tag, Genre, Platform,
                  Component, Manufacturer, User):
        model.query.delete()
    db.session.commit()
