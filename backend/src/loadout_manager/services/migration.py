"""Version detection and the one-way migration chain for persisted data.

Every generation converts to the next through exactly one function, and
``upgrade`` walks the chain until the current generation.  Nothing outside
this module ever sees a non-current generation.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from loadout_manager.errors import DeserializationFailedError, UnsupportedSchemaVersionError
from loadout_manager.models.config import CONFIG_VERSION, Config, LegacyConfig, TaggedConfigV0
from loadout_manager.models.mod_data import GroupRef, ModData, ModGroup, ModProfile
from loadout_manager.models.versions import (
    CURRENT_VERSION,
    KNOWN_VERSIONS,
    ModDataV0,
    ModDataV1,
    ModProfileV0,
    ModProfileV1,
    TaggedModDataV2,
    VersionAnnotatedModData,
)

logger = logging.getLogger(__name__)

_versioned_mod_data = TypeAdapter(VersionAnnotatedModData)

AnyModData = ModDataV0 | ModDataV1 | ModData


# ---------------------------------------------------------------------------
# Profile-level transforms
# ---------------------------------------------------------------------------


def migrate_profile_v0_to_v1(legacy: ModProfileV0) -> ModProfileV1:
    raise NotImplementedError("profile migration to 0.1.0 is done by migrate_v0_to_v1")


def migrate_profile_v1_to_v2(legacy: ModProfileV1) -> ModProfile:
    """Carry the mod list over unchanged.

    ``groups`` starts empty: populating it needs the store-wide group map,
    which only ``migrate_v1_to_v2`` has.
    """
    return ModProfile(mods=list(legacy.mods), groups={})


# ---------------------------------------------------------------------------
# Store-level transforms
# ---------------------------------------------------------------------------


def migrate_v0_to_v1(legacy: ModDataV0) -> ModDataV1:
    """Wrap every flat mod entry as an individual item; no folders exist yet."""
    profiles = {
        name: ModProfileV1(mods=list(profile.mods)) for name, profile in legacy.profiles.items()
    }
    return ModDataV1(active_profile=legacy.active_profile, profiles=profiles, groups={})


def migrate_v1_to_v2(legacy: ModDataV1) -> ModData:
    """Move store-wide folders into the profiles that reference them.

    A folder referenced by several profiles is copied into each, so the
    copies are edited independently from then on.  Folders nobody references
    are dropped.
    """
    profiles: dict[str, ModProfile] = {}
    referenced: set[str] = set()

    for name, profile in legacy.profiles.items():
        groups: dict[str, ModGroup] = {}
        for item in profile.mods:
            if isinstance(item, GroupRef) and item.group_name in legacy.groups:
                groups[item.group_name] = legacy.groups[item.group_name].model_copy(deep=True)
        referenced.update(groups)

        migrated = migrate_profile_v1_to_v2(profile)
        migrated.groups = groups
        profiles[name] = migrated

    dropped = sorted(set(legacy.groups) - referenced)
    if dropped:
        logger.info("Dropping %d unreferenced folder(s): %s", len(dropped), ", ".join(dropped))

    return ModData(active_profile=legacy.active_profile, profiles=profiles)


def upgrade(record: AnyModData) -> ModData:
    """Apply the migration chain until *record* is the current generation."""
    match record:
        case ModDataV0():
            logger.info("Migrating mod data 0.0.0 -> 0.1.0")
            return upgrade(migrate_v0_to_v1(record))
        case ModDataV1():
            logger.info("Migrating mod data 0.1.0 -> %s", CURRENT_VERSION)
            return upgrade(migrate_v1_to_v2(record))
        case ModData():
            return ModData(active_profile=record.active_profile, profiles=record.profiles)
        case _:
            raise TypeError(f"Not a mod data generation: {type(record).__name__}")


# ---------------------------------------------------------------------------
# (De)serialization
# ---------------------------------------------------------------------------


def _decode_object(raw: bytes, source: str) -> dict[str, Any]:
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DeserializationFailedError(source, str(exc)) from exc
    if not isinstance(document, dict):
        raise DeserializationFailedError(source, "expected a JSON object")
    return document


def parse_mod_data(raw: bytes, source: str = "mod data") -> AnyModData:
    """Detect the generation of a mod data document and validate it as such."""
    document = _decode_object(raw, source)
    try:
        if "version" not in document:
            return ModDataV0.model_validate(document)
        version = document["version"]
        if version not in KNOWN_VERSIONS:
            raise UnsupportedSchemaVersionError(version)
        return _versioned_mod_data.validate_python(document)
    except ValidationError as exc:
        raise DeserializationFailedError(source, str(exc)) from exc


def load_mod_data(raw: bytes, source: str = "mod data") -> ModData:
    return upgrade(parse_mod_data(raw, source))


def dump_mod_data(data: ModData) -> bytes:
    tagged = TaggedModDataV2(active_profile=data.active_profile, profiles=data.profiles)
    return tagged.model_dump_json(indent=2).encode("utf-8")


def load_config(raw: bytes, source: str = "config") -> Config:
    document = _decode_object(raw, source)
    try:
        if "version" not in document:
            legacy = LegacyConfig.model_validate(document)
            logger.info("Migrating unversioned config to %s", CONFIG_VERSION)
            return Config(
                provider_parameters=legacy.provider_parameters,
                game_pak_path=legacy.game_pak_path,
            )
        if document["version"] != CONFIG_VERSION:
            raise UnsupportedSchemaVersionError(document["version"])
        return Config.model_validate(document)
    except ValidationError as exc:
        raise DeserializationFailedError(source, str(exc)) from exc


def dump_config(config: Config) -> bytes:
    tagged = TaggedConfigV0.model_validate(config.model_dump())
    return tagged.model_dump_json(indent=2).encode("utf-8")
