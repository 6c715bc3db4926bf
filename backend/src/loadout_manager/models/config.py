"""Application config persisted next to the mod data (``config.json``)."""

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from loadout_manager.schemas.sorting import SortingConfig

CONFIG_VERSION = "0.0.0"


class GuiTheme(StrEnum):
    Light = "Light"
    Dark = "Dark"


class Config(BaseModel):
    provider_parameters: dict[str, dict[str, str]] = Field(default_factory=dict)
    game_pak_path: Path | None = None
    gui_theme: GuiTheme | None = None
    sorting_config: SortingConfig | None = None
    confirm_mod_deletion: bool = True
    confirm_profile_deletion: bool = True
    backup_path: Path | None = None


class LegacyConfig(BaseModel):
    """Config written before versioning; only these fields carried over."""

    provider_parameters: dict[str, dict[str, str]] = Field(default_factory=dict)
    game_pak_path: Path | None = None


class TaggedConfigV0(Config):
    version: Literal["0.0.0"] = CONFIG_VERSION
