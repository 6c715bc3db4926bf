from typing import Literal

from pydantic import BaseModel

from loadout_manager.models.mod_data import ModConfig, ModProfile


class ProfileCreate(BaseModel):
    name: str


class ProfileRename(BaseModel):
    name: str


class ProfileDuplicateRequest(BaseModel):
    name: str


class ProfileSummaryOut(BaseModel):
    name: str
    is_active: bool
    mod_count: int
    enabled_count: int
    group_count: int


class ProfileOut(BaseModel):
    name: str
    is_active: bool
    profile: ModProfile


class EnabledModOut(BaseModel):
    mod: ModConfig
    effective_priority: int


class EnabledModsOut(BaseModel):
    profile_name: str
    mods: list[EnabledModOut]
    mod_string: str


class SortedModOut(BaseModel):
    mod: ModConfig
    name: str | None = None


# --- Folders ---


class GroupCreate(BaseModel):
    name: str


class GroupUpdate(BaseModel):
    name: str | None = None
    enabled: bool | None = None
    priority_override: int | None = None
    clear_priority_override: bool = False


class GroupMoveRequest(BaseModel):
    action: Literal["to_group", "out_of_group", "between_groups"]
    mod_index: int
    from_group: str | None = None
    to_group: str | None = None


# --- Mods ---


class ModsAddRequest(BaseModel):
    urls: list[str]


class ModsAddResult(BaseModel):
    added: int
    skipped: int


class ModUpdate(BaseModel):
    group_name: str | None = None
    enabled: bool | None = None
    priority: int | None = None


class ReorderRequest(BaseModel):
    from_index: int
    to_index: int


class MutationResult(BaseModel):
    changed: bool
