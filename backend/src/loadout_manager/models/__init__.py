from loadout_manager.models.config import Config, GuiTheme
from loadout_manager.models.mod_data import (
    GroupRef,
    ModConfig,
    ModData,
    ModGroup,
    ModOrGroup,
    ModProfile,
    ModSpecification,
)

__all__ = [
    "Config",
    "GroupRef",
    "GuiTheme",
    "ModConfig",
    "ModData",
    "ModGroup",
    "ModOrGroup",
    "ModProfile",
    "ModSpecification",
]
