"""Interface to the metadata providers that resolve mod specifications.

Providers (mod.io, plain HTTP, local files) live outside this package.  The
store only needs lookups keyed by specification, which is what
``ModResolver`` describes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from loadout_manager.models.mod_data import ModData, ModSpecification
from loadout_manager.schemas.mod_info import ModInfo
from loadout_manager.services.query import iter_mods
from loadout_manager.services.sorting import ModListEntry


class ModResolver(Protocol):
    """Lookups the store and the display comparator consume."""

    def get_mod_info(self, spec: ModSpecification) -> ModInfo | None: ...

    def satisfies_dependency(
        self, spec: ModSpecification, dependency: ModSpecification
    ) -> bool: ...


class StaticResolver:
    """Resolver backed by an in-memory mapping of already fetched metadata."""

    def __init__(self, infos: Iterable[ModInfo] = ()) -> None:
        self._infos: dict[ModSpecification, ModInfo] = {}
        for info in infos:
            self.add(info)

    def add(self, info: ModInfo) -> None:
        self._infos[info.spec] = info
        for version in info.versions:
            self._infos.setdefault(version, info)

    def get_mod_info(self, spec: ModSpecification) -> ModInfo | None:
        return self._infos.get(spec)

    def satisfies_dependency(self, spec: ModSpecification, dependency: ModSpecification) -> bool:
        """A spec satisfies a dependency on itself or on any of its versions."""
        if spec == dependency:
            return True
        info = self._infos.get(spec)
        return info is not None and (dependency == info.spec or dependency in info.versions)


def flatten_with_info(data: ModData, profile: str, resolver: ModResolver) -> list[ModListEntry]:
    """Pair every reachable mod with its metadata for the display comparator.

    Folder references are expanded, so the result never contains a
    ``GroupRef``.
    """
    entries: list[ModListEntry] = []
    for mc in iter_mods(data, profile):
        entries.append((mc, resolver.get_mod_info(mc.spec)))
    return entries
