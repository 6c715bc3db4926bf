from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from loadout_manager.config import Settings
from loadout_manager.main import app
from loadout_manager.models.mod_data import (
    GroupRef,
    ModConfig,
    ModData,
    ModGroup,
    ModProfile,
    ModSpecification,
)
from loadout_manager.state import State


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(config_dir=tmp_path / "config")


@pytest.fixture
def make_mod():
    def _make(
        url: str,
        *,
        enabled: bool = True,
        priority: int = 0,
        required: bool = False,
    ) -> ModConfig:
        return ModConfig(
            spec=ModSpecification(url=url),
            required=required,
            enabled=enabled,
            priority=priority,
        )

    return _make


@pytest.fixture
def mod_data(make_mod) -> ModData:
    """Root mod A (prio 5), then folder "core" holding B (prio 1) and C (prio 9, disabled)."""
    profile = ModProfile(
        mods=[
            make_mod("https://mods.example/a", priority=5),
            GroupRef(group_name="core", enabled=True),
        ],
        groups={
            "core": ModGroup(
                mods=[
                    make_mod("https://mods.example/b", priority=1),
                    make_mod("https://mods.example/c", priority=9, enabled=False),
                ]
            )
        },
    )
    return ModData(active_profile="default", profiles={"default": profile})


@pytest.fixture
def state(settings) -> State:
    return State.init(settings)


@pytest.fixture
def client(state, monkeypatch) -> Generator[TestClient, None, None]:
    monkeypatch.setattr(app.state, "loadout", state, raising=False)
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
