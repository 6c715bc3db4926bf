"""Current-generation mod data: profiles of mods and per-profile folders.

A profile's ``mods`` list mixes individual mod entries with references to
folders (``GroupRef``).  A reference only carries the folder name and its
enabled flag; the folder contents live in the same profile's ``groups`` map.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    SerializerFunctionWrapHandler,
    Tag,
    model_serializer,
)

from loadout_manager.errors import NoSuchProfileError

DEFAULT_PROFILE = "default"


class ModSpecification(BaseModel):
    """Opaque locator for a mod, resolved to metadata by a provider."""

    model_config = ConfigDict(frozen=True)

    url: str


class ModConfig(BaseModel):
    spec: ModSpecification
    required: bool
    enabled: bool = True
    priority: int = 0

    @model_serializer(mode="wrap")
    def _omit_zero_priority(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.priority == 0:
            data.pop("priority", None)
        return data


class ModGroup(BaseModel):
    mods: list[ModConfig] = Field(default_factory=list)
    # When set, every mod in the folder uses this instead of its own priority
    priority_override: int | None = None

    @model_serializer(mode="wrap")
    def _omit_unset_override(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.priority_override is None:
            data.pop("priority_override", None)
        return data


class GroupRef(BaseModel):
    group_name: str
    enabled: bool = True


def _mod_or_group_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "group" if "group_name" in value else "individual"
    return "group" if isinstance(value, GroupRef) else "individual"


ModOrGroup = Annotated[
    Annotated[GroupRef, Tag("group")] | Annotated[ModConfig, Tag("individual")],
    Discriminator(_mod_or_group_tag),
]


class ModProfile(BaseModel):
    mods: list[ModOrGroup] = Field(default_factory=list)
    groups: dict[str, ModGroup] = Field(default_factory=dict)

    def group_refs(self, group_name: str) -> list[GroupRef]:
        return [
            item
            for item in self.mods
            if isinstance(item, GroupRef) and item.group_name == group_name
        ]


def _default_profiles() -> dict[str, ModProfile]:
    return {DEFAULT_PROFILE: ModProfile()}


class ModData(BaseModel):
    active_profile: str = DEFAULT_PROFILE
    profiles: dict[str, ModProfile] = Field(default_factory=_default_profiles)

    def get_profile(self, name: str) -> ModProfile:
        """Return the named profile or raise ``NoSuchProfileError``."""
        try:
            return self.profiles[name]
        except KeyError:
            raise NoSuchProfileError(name) from None

    def get_active_profile(self) -> ModProfile:
        return self.get_profile(self.active_profile)
