"""Schema generations of the persisted mod data and their version envelope.

- ``0.0.0``: each profile is a flat list of mods.
- ``0.1.0``: profiles mix mods with folder references; folders are stored
  once per store in a global ``groups`` map.
- ``0.2.0``: folders are stored per profile and carry an optional priority
  override.  This is the generation held in memory (``ModData``).

On disk the version tag sits beside the data fields.  Files written before
versioning existed carry no tag at all and are read as ``0.0.0``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from loadout_manager.models.mod_data import (
    DEFAULT_PROFILE,
    ModConfig,
    ModData,
    ModGroup,
    ModOrGroup,
)

CURRENT_VERSION = "0.2.0"
KNOWN_VERSIONS = ("0.0.0", "0.1.0", CURRENT_VERSION)


class ModProfileV0(BaseModel):
    mods: list[ModConfig] = Field(default_factory=list)


class ModProfileV1(BaseModel):
    mods: list[ModOrGroup] = Field(default_factory=list)


class ModDataV0(BaseModel):
    active_profile: str = DEFAULT_PROFILE
    profiles: dict[str, ModProfileV0] = Field(
        default_factory=lambda: {DEFAULT_PROFILE: ModProfileV0()}
    )


class ModDataV1(BaseModel):
    active_profile: str = DEFAULT_PROFILE
    profiles: dict[str, ModProfileV1] = Field(
        default_factory=lambda: {DEFAULT_PROFILE: ModProfileV1()}
    )
    groups: dict[str, ModGroup] = Field(default_factory=dict)


class TaggedModDataV0(ModDataV0):
    version: Literal["0.0.0"]


class TaggedModDataV1(ModDataV1):
    version: Literal["0.1.0"]


class TaggedModDataV2(ModData):
    version: Literal["0.2.0"] = CURRENT_VERSION


VersionAnnotatedModData = Annotated[
    TaggedModDataV0 | TaggedModDataV1 | TaggedModDataV2,
    Field(discriminator="version"),
]
