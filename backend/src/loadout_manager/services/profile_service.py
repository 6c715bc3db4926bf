"""Profile, folder and mod-entry mutations on an in-memory ``ModData``.

Every function edits the store it is given and never saves; the caller
persists once it is done with a batch of edits.

Structural violations (unknown profile, duplicate names, deleting the last
profile) raise typed errors.  Relocations and deletions addressed by index
are no-ops returning ``False`` when the index or folder no longer exists,
since those arguments usually come from a list the user was looking at a
moment ago.  Indices shift after every removal and must be re-resolved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from loadout_manager.errors import (
    DuplicateGroupNameError,
    DuplicateProfileNameError,
    InvalidNameError,
    LastProfileError,
)
from loadout_manager.models.mod_data import (
    GroupRef,
    ModConfig,
    ModData,
    ModGroup,
    ModProfile,
    ModSpecification,
)
from loadout_manager.services.query import any_mod

logger = logging.getLogger(__name__)


def _clean_name(name: str, kind: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise InvalidNameError(f"{kind} name must not be empty")
    return cleaned


def _in_range(index: int, length: int) -> bool:
    return 0 <= index < length


def _group_name_taken(prof: ModProfile, name: str) -> bool:
    # A dangling reference still claims its name
    return name in prof.groups or bool(prof.group_refs(name))


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


def create_profile(data: ModData, name: str) -> str:
    """Add an empty profile and return its (trimmed) name."""
    name = _clean_name(name, "Profile")
    if name in data.profiles:
        raise DuplicateProfileNameError(name)
    data.profiles[name] = ModProfile()
    logger.info("Created profile '%s'", name)
    return name


def duplicate_profile(data: ModData, source: str, new_name: str) -> str:
    """Copy a profile, folders included, under a new name."""
    original = data.get_profile(source)
    new_name = _clean_name(new_name, "Profile")
    if new_name in data.profiles:
        raise DuplicateProfileNameError(new_name)
    data.profiles[new_name] = original.model_copy(deep=True)
    logger.info("Duplicated profile '%s' as '%s'", source, new_name)
    return new_name


def rename_profile(data: ModData, old: str, new: str) -> str:
    data.get_profile(old)
    new = _clean_name(new, "Profile")
    if new == old:
        return new
    if new in data.profiles:
        raise DuplicateProfileNameError(new)
    data.profiles = {(new if key == old else key): value for key, value in data.profiles.items()}
    if data.active_profile == old:
        data.active_profile = new
    logger.info("Renamed profile '%s' to '%s'", old, new)
    return new


def set_active_profile(data: ModData, name: str) -> None:
    data.get_profile(name)
    data.active_profile = name


def delete_profile(data: ModData, name: str) -> None:
    """Remove a profile; the only remaining profile cannot be removed.

    When the active profile goes away, the alphabetically first remaining
    profile becomes active.
    """
    data.get_profile(name)
    if len(data.profiles) == 1:
        raise LastProfileError(name)
    del data.profiles[name]
    if data.active_profile == name:
        data.active_profile = min(data.profiles)
        logger.info("Active profile deleted, switched to '%s'", data.active_profile)
    logger.info("Deleted profile '%s'", name)


# ---------------------------------------------------------------------------
# Folders
# ---------------------------------------------------------------------------


def create_group(data: ModData, profile: str, name: str) -> str:
    """Add an empty, enabled folder at the end of the profile."""
    prof = data.get_profile(profile)
    name = _clean_name(name, "Folder")
    if _group_name_taken(prof, name):
        raise DuplicateGroupNameError(name)
    prof.groups[name] = ModGroup()
    prof.mods.append(GroupRef(group_name=name, enabled=True))
    return name


def rename_group(data: ModData, profile: str, old: str, new: str) -> bool:
    """Rename a folder, keeping its position in both the map and the mod list."""
    prof = data.get_profile(profile)
    new = _clean_name(new, "Folder")
    if new == old:
        return False
    if _group_name_taken(prof, new):
        raise DuplicateGroupNameError(new)
    if old not in prof.groups:
        logger.debug("Rename of missing folder '%s' in '%s' ignored", old, profile)
        return False

    prof.groups = {(new if key == old else key): value for key, value in prof.groups.items()}
    for ref in prof.group_refs(old):
        ref.group_name = new
    return True


def delete_group(data: ModData, profile: str, name: str) -> bool:
    """Delete a folder, moving its mods to the end of the profile root.

    The relocated mods keep their relative order and their own settings.
    Every reference to the folder is removed.
    """
    prof = data.get_profile(profile)
    group = prof.groups.pop(name, None)
    had_refs = bool(prof.group_refs(name))
    if group is None and not had_refs:
        return False

    prof.mods = [
        item
        for item in prof.mods
        if not (isinstance(item, GroupRef) and item.group_name == name)
    ]
    if group is not None:
        prof.mods.extend(group.mods)
    return True


def set_group_enabled(data: ModData, profile: str, name: str, enabled: bool) -> bool:
    prof = data.get_profile(profile)
    refs = prof.group_refs(name)
    for ref in refs:
        ref.enabled = enabled
    return bool(refs)


def set_group_priority_override(
    data: ModData, profile: str, name: str, priority_override: int | None
) -> bool:
    """Set or clear (``None``) the priority applied to every mod in a folder."""
    prof = data.get_profile(profile)
    group = prof.groups.get(name)
    if group is None:
        return False
    group.priority_override = priority_override
    return True


# ---------------------------------------------------------------------------
# Relocation between root and folders
# ---------------------------------------------------------------------------


def move_mod_to_group(data: ModData, profile: str, mod_index: int, group_name: str) -> bool:
    """Move the individual mod at root *mod_index* to the end of a folder."""
    prof = data.get_profile(profile)
    group = prof.groups.get(group_name)
    if group is None or not _in_range(mod_index, len(prof.mods)):
        logger.debug("move_mod_to_group(%d, '%s') ignored", mod_index, group_name)
        return False
    item = prof.mods[mod_index]
    if isinstance(item, GroupRef):
        return False
    del prof.mods[mod_index]
    group.mods.append(item)
    return True


def move_mod_out_of_group(data: ModData, profile: str, group_name: str, mod_index: int) -> bool:
    """Move a folder member to the end of the profile root."""
    prof = data.get_profile(profile)
    group = prof.groups.get(group_name)
    if group is None or not _in_range(mod_index, len(group.mods)):
        logger.debug("move_mod_out_of_group('%s', %d) ignored", group_name, mod_index)
        return False
    prof.mods.append(group.mods.pop(mod_index))
    return True


def move_mod_between_groups(
    data: ModData, profile: str, from_group: str, mod_index: int, to_group: str
) -> bool:
    prof = data.get_profile(profile)
    source = prof.groups.get(from_group)
    target = prof.groups.get(to_group)
    if source is None or target is None or not _in_range(mod_index, len(source.mods)):
        logger.debug(
            "move_mod_between_groups('%s', %d, '%s') ignored", from_group, mod_index, to_group
        )
        return False
    target.mods.append(source.mods.pop(mod_index))
    return True


# ---------------------------------------------------------------------------
# Mod entries
# ---------------------------------------------------------------------------


def add_mods(data: ModData, profile: str, specs: Iterable[ModSpecification]) -> int:
    """Append mods not already in the profile (root or any folder).

    Returns how many were added.
    """
    prof = data.get_profile(profile)
    added = 0
    for spec in specs:
        if any_mod(data, profile, lambda mc, _group_enabled: mc.spec == spec):
            logger.debug("Mod %s already in profile '%s'", spec.url, profile)
            continue
        prof.mods.append(ModConfig(spec=spec, required=False))
        added += 1
    return added


def delete_mod(data: ModData, profile: str, row_index: int) -> bool:
    """Remove the individual mod at a root row.

    Folder rows are left alone; ``delete_group`` removes folders.
    """
    prof = data.get_profile(profile)
    if not _in_range(row_index, len(prof.mods)) or isinstance(prof.mods[row_index], GroupRef):
        return False
    del prof.mods[row_index]
    return True


def delete_mod_in_group(data: ModData, profile: str, group_name: str, mod_index: int) -> bool:
    prof = data.get_profile(profile)
    group = prof.groups.get(group_name)
    if group is None or not _in_range(mod_index, len(group.mods)):
        return False
    del group.mods[mod_index]
    return True


def _find_mod(
    data: ModData, profile: str, index: int, group_name: str | None
) -> ModConfig | None:
    prof = data.get_profile(profile)
    if group_name is None:
        if not _in_range(index, len(prof.mods)):
            return None
        item = prof.mods[index]
        return None if isinstance(item, GroupRef) else item
    group = prof.groups.get(group_name)
    if group is None or not _in_range(index, len(group.mods)):
        return None
    return group.mods[index]


def set_mod_enabled(
    data: ModData, profile: str, index: int, enabled: bool, *, group_name: str | None = None
) -> bool:
    mc = _find_mod(data, profile, index, group_name)
    if mc is None:
        return False
    mc.enabled = enabled
    return True


def set_mod_priority(
    data: ModData, profile: str, index: int, priority: int, *, group_name: str | None = None
) -> bool:
    """Set a mod's own priority; a folder override still takes precedence."""
    mc = _find_mod(data, profile, index, group_name)
    if mc is None:
        return False
    mc.priority = priority
    return True


def reorder_mod(data: ModData, profile: str, from_index: int, to_index: int) -> bool:
    """Drag a root row (mod or folder) to a new position."""
    prof = data.get_profile(profile)
    if not (_in_range(from_index, len(prof.mods)) and _in_range(to_index, len(prof.mods))):
        return False
    item = prof.mods.pop(from_index)
    prof.mods.insert(to_index, item)
    return True


def reorder_mod_in_group(
    data: ModData, profile: str, group_name: str, from_index: int, to_index: int
) -> bool:
    prof = data.get_profile(profile)
    group = prof.groups.get(group_name)
    if group is None:
        return False
    if not (_in_range(from_index, len(group.mods)) and _in_range(to_index, len(group.mods))):
        return False
    group.mods.insert(to_index, group.mods.pop(from_index))
    return True
