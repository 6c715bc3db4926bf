"""Display ordering of a profile's mods by a user-selected column.

The comparator only orders a copy for presentation; the stored list order
is the "manual" sort and changes only through explicit reordering.
Missing metadata orders before any present value.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from typing import Any

from loadout_manager.errors import GroupSortingNotSupportedError
from loadout_manager.models.mod_data import GroupRef, ModConfig, ModOrGroup
from loadout_manager.schemas.mod_info import ModInfo
from loadout_manager.schemas.sorting import SortBy, SortingConfig

ModListEntry = tuple[ModOrGroup, ModInfo | None]


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _optional(value: Any) -> tuple[Any, ...]:
    return (0,) if value is None else (1, value)


def _name_key(mc: ModConfig, info: ModInfo | None) -> tuple[Any, ...]:
    return (_optional(info.name.lower() if info else None), mc.spec.url)


def _provider_key(info: ModInfo | None) -> tuple[Any, ...]:
    return _optional(info.provider if info else None)


def _approval_key(info: ModInfo | None) -> tuple[Any, ...]:
    tags = info.modio_tags if info else None
    return _optional(tags.approval_status.rank if tags else None)


def _required_key(info: ModInfo | None) -> tuple[Any, ...]:
    tags = info.modio_tags if info else None
    # reversed: required-by-all sorts after optional
    return _optional(-tags.required_status.rank if tags else None)


def sort_mods(config: SortingConfig) -> Callable[[ModListEntry, ModListEntry], int]:
    """Build a three-way comparator over ``(item, metadata)`` pairs.

    Every column except Name falls back to the name order on ties, so the
    result is deterministic.  ``is_ascending`` flips the primary column
    only; saved sorting configs rely on that meaning.
    """

    def compare(entry_a: ModListEntry, entry_b: ModListEntry) -> int:
        a, info_a = entry_a
        b, info_b = entry_b
        if isinstance(a, GroupRef) or isinstance(b, GroupRef):
            raise GroupSortingNotSupportedError("Folders cannot be sorted by column")

        name_order = _cmp(_name_key(a, info_a), _name_key(b, info_b))
        match config.sort_category:
            case SortBy.Enabled:
                order = _cmp(b.enabled, a.enabled)
            case SortBy.Name:
                order = name_order
            case SortBy.Priority:
                order = _cmp(a.priority, b.priority)
            case SortBy.Provider:
                order = _cmp(_provider_key(info_a), _provider_key(info_b))
            case SortBy.RequiredStatus:
                order = _cmp(_required_key(info_a), _required_key(info_b))
            case SortBy.ApprovalCategory:
                order = _cmp(_approval_key(info_a), _approval_key(info_b))

        if config.is_ascending:
            order = -order
        if config.sort_category != SortBy.Name and order == 0:
            order = name_order
        return order

    return compare


def sorted_mods(entries: Iterable[ModListEntry], config: SortingConfig) -> list[ModListEntry]:
    return sorted(entries, key=functools.cmp_to_key(sort_mods(config)))
