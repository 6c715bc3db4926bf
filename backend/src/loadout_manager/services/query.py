"""Read-side traversal of a profile's mods, resolving folder references.

A folder's own enabled flag gates its members without touching their
stored ``enabled`` values, so toggling a folder off and on again keeps the
individually disabled mods inside it disabled.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from pydantic import BaseModel

from loadout_manager.models.mod_data import GroupRef, ModConfig, ModData


class ModCounts(BaseModel):
    total: int = 0
    enabled: int = 0
    disabled_root: int = 0
    disabled_in_enabled_groups: int = 0
    in_disabled_groups: int = 0


def _accept_all(_: object) -> bool:
    return True


def iter_mods(
    data: ModData,
    profile: str,
    *,
    group_filter: Callable[[bool], bool] = _accept_all,
    mod_filter: Callable[[ModConfig], bool] = _accept_all,
) -> Iterator[ModConfig]:
    """Yield the profile's mods in list order, expanding folder references.

    *group_filter* receives a folder reference's enabled flag and decides
    whether its members are visited at all.  References to folders missing
    from the profile are skipped.
    """
    prof = data.get_profile(profile)
    for item in prof.mods:
        if isinstance(item, GroupRef):
            if not group_filter(item.enabled):
                continue
            group = prof.groups.get(item.group_name)
            if group is None:
                continue
            for mc in group.mods:
                if mod_filter(mc):
                    yield mc
        elif mod_filter(item):
            yield item


def for_each_mod(data: ModData, profile: str, f: Callable[[ModConfig], None]) -> None:
    for mc in iter_mods(data, profile):
        f(mc)


def for_each_mod_mut(data: ModData, profile: str, f: Callable[[ModConfig], None]) -> None:
    """Visit every reachable mod so *f* can edit it in place."""
    for mc in list(iter_mods(data, profile)):
        f(mc)


def for_each_enabled_mod(data: ModData, profile: str, f: Callable[[ModConfig], None]) -> None:
    for mc in iter_mods(
        data,
        profile,
        group_filter=lambda enabled: enabled,
        mod_filter=lambda mc: mc.enabled,
    ):
        f(mc)


def get_enabled_mods_with_priority(data: ModData, profile: str) -> list[tuple[ModConfig, int]]:
    """Return enabled mods paired with their effective priority.

    Inside a folder with a priority override the override wins; everywhere
    else the mod's own priority is used.
    """
    prof = data.get_profile(profile)
    result: list[tuple[ModConfig, int]] = []
    for item in prof.mods:
        if isinstance(item, GroupRef):
            if not item.enabled:
                continue
            group = prof.groups.get(item.group_name)
            if group is None:
                continue
            for mc in group.mods:
                if mc.enabled:
                    effective = (
                        group.priority_override
                        if group.priority_override is not None
                        else mc.priority
                    )
                    result.append((mc, effective))
        elif item.enabled:
            result.append((item, item.priority))
    return result


def get_install_order(data: ModData, profile: str) -> list[tuple[ModConfig, int]]:
    """Enabled mods ordered by effective priority, highest first.

    The sort is stable, so mods with equal priority keep their list order.
    """
    mods = get_enabled_mods_with_priority(data, profile)
    return sorted(mods, key=lambda pair: -pair[1])


def any_mod(
    data: ModData,
    profile: str,
    predicate: Callable[[ModConfig, bool | None], bool],
) -> bool:
    """Return True on the first mod matching *predicate*.

    The second argument is ``None`` for mods at the profile root and the
    folder's enabled flag for folder members.
    """
    prof = data.get_profile(profile)
    for item in prof.mods:
        if isinstance(item, GroupRef):
            group = prof.groups.get(item.group_name)
            if group is None:
                continue
            if any(predicate(mc, item.enabled) for mc in group.mods):
                return True
        elif predicate(item, None):
            return True
    return False


def count_mods(data: ModData, profile: str) -> ModCounts:
    prof = data.get_profile(profile)
    counts = ModCounts()
    for item in prof.mods:
        if isinstance(item, GroupRef):
            group = prof.groups.get(item.group_name)
            if group is None:
                continue
            for mc in group.mods:
                counts.total += 1
                if not item.enabled:
                    counts.in_disabled_groups += 1
                elif mc.enabled:
                    counts.enabled += 1
                else:
                    counts.disabled_in_enabled_groups += 1
        else:
            counts.total += 1
            if item.enabled:
                counts.enabled += 1
            else:
                counts.disabled_root += 1
    return counts


def build_mod_string(mods: list[ModConfig]) -> str:
    """One URL per line for every enabled mod, for pasting elsewhere."""
    return "".join(f"{mc.spec.url}\n" for mc in mods if mc.enabled)
