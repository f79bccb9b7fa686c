"""Shared fixtures: app on in-memory SQLite, a small seeded catalog and user helpers."""

from types import SimpleNamespace

import pytest

from gamematch import create_app
from gamematch.config import TestConfig
from gamematch.extension.extensions import db as _db
from gamematch.models import (
    Component, ComponentKind, Game, Genre, Manufacturer, Platform, RequirementSet, Tag, User
)

PASSWORD = "secret-password"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


def _component(name, kind, manufacturer, score):
    component = Component(name=name, kind=kind, manufacturer_id=manufacturer.id, benchmark_score=score)
    _db.session.add(component)
    return component


@pytest.fixture
def catalog(app):
    """
    Two CPUs/GPUs tiers plus two games:
    'Baseline' recommends the mid tier, 'Demanding' recommends a 10000 CPU.
    """
    intel = Manufacturer(name="Intel")
    nvidia = Manufacturer(name="NVIDIA")
    action = Genre(name="Action")
    rpg = Genre(name="RPG")
    pc = Platform(name="PC")
    coop = Tag(name="Co-op")
    _db.session.add_all([intel, nvidia, action, rpg, pc, coop])
    _db.session.flush()

    cpu_low = _component("Core i3", ComponentKind.CPU, intel, 3000)
    cpu_mid = _component("Core i5", ComponentKind.CPU, intel, 5000)
    cpu_high = _component("Core i9", ComponentKind.CPU, intel, 10000)
    gpu_low = _component("GTX 1060", ComponentKind.GPU, nvidia, 6000)
    gpu_mid = _component("RTX 2070", ComponentKind.GPU, nvidia, 8000)
    _db.session.flush()

    def requirement(rec_cpu):
        return RequirementSet(
            min_cpu_id=cpu_low.id, min_gpu_id=gpu_low.id,
            rec_cpu_id=rec_cpu.id, rec_gpu_id=gpu_mid.id,
            min_ram=8, min_vram=2048, rec_ram=16, rec_vram=4096,
        )

    baseline = Game(title="Baseline", release_year=2020, genre_id=action.id, platform_id=pc.id,
                    tags=[coop], requirements=[requirement(cpu_mid)])
    demanding = Game(title="Demanding", release_year=2022, genre_id=rpg.id, platform_id=pc.id,
                     requirements=[requirement(cpu_high)])
    _db.session.add_all([baseline, demanding])
    _db.session.commit()

    return SimpleNamespace(
        intel=intel, nvidia=nvidia, action=action, rpg=rpg, pc=pc, coop=coop,
        cpu_low=cpu_low, cpu_mid=cpu_mid, cpu_high=cpu_high,
        gpu_low=gpu_low, gpu_mid=gpu_mid,
        baseline=baseline, demanding=demanding,
    )


def make_user(email, role="user", password=PASSWORD):
    user = User(email=email, name=email.split("@")[0], role=role)
    user.set_password(password)
    _db.session.add(user)
    _db.session.commit()
    return user


def login(client, email, password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def user_client(app, client):
    user = make_user("player@example.com")
    assert login(client, user.email).status_code == 200
    client.user = user
    return client


@pytest.fixture
def admin_client(app, client):
    admin = make_user("admin@example.com", role="admin")
    assert login(client, admin.email).status_code == 200
    client.user = admin
    return client
