"""Endpoints for profile management and read-only profile views."""

from fastapi import APIRouter, Depends, Query

from loadout_manager.models.mod_data import GroupRef
from loadout_manager.routers.deps import get_resolver, get_state, http_errors, save_if_changed
from loadout_manager.schemas.profile import (
    EnabledModOut,
    EnabledModsOut,
    ProfileCreate,
    ProfileDuplicateRequest,
    ProfileOut,
    ProfileRename,
    ProfileSummaryOut,
    SortedModOut,
)
from loadout_manager.schemas.sorting import SortBy, SortingConfig
from loadout_manager.services.profile_service import (
    create_profile,
    delete_profile,
    duplicate_profile,
    rename_profile,
    set_active_profile,
)
from loadout_manager.services.query import build_mod_string, count_mods, get_install_order
from loadout_manager.services.resolver import ModResolver, flatten_with_info
from loadout_manager.services.sorting import sorted_mods
from loadout_manager.state import State

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _summary(state: State, name: str) -> ProfileSummaryOut:
    data = state.mod_data.value
    counts = count_mods(data, name)
    prof = data.get_profile(name)
    return ProfileSummaryOut(
        name=name,
        is_active=data.active_profile == name,
        mod_count=counts.total,
        enabled_count=counts.enabled,
        group_count=sum(1 for item in prof.mods if isinstance(item, GroupRef)),
    )


def _profile_out(state: State, name: str) -> ProfileOut:
    data = state.mod_data.value
    return ProfileOut(
        name=name,
        is_active=data.active_profile == name,
        profile=data.get_profile(name),
    )


@router.get("/", response_model=list[ProfileSummaryOut])
async def list_profiles(state: State = Depends(get_state)) -> list[ProfileSummaryOut]:
    """List every profile with its mod counts."""
    return [_summary(state, name) for name in state.mod_data.value.profiles]


@router.post("/", response_model=ProfileOut, status_code=201)
async def add_profile(data: ProfileCreate, state: State = Depends(get_state)) -> ProfileOut:
    """Create an empty profile."""
    with state.lock, http_errors():
        name = create_profile(state.mod_data.value, data.name)
        state.mod_data.save()
        return _profile_out(state, name)


@router.get("/{profile_name}", response_model=ProfileOut)
async def get_profile(profile_name: str, state: State = Depends(get_state)) -> ProfileOut:
    with http_errors():
        return _profile_out(state, profile_name)


@router.patch("/{profile_name}", response_model=ProfileOut)
async def patch_profile(
    profile_name: str, data: ProfileRename, state: State = Depends(get_state)
) -> ProfileOut:
    """Rename a profile."""
    with state.lock, http_errors():
        name = rename_profile(state.mod_data.value, profile_name, data.name)
        save_if_changed(state, name != profile_name)
        return _profile_out(state, name)


@router.delete("/{profile_name}", status_code=204)
async def remove_profile(profile_name: str, state: State = Depends(get_state)) -> None:
    """Delete a profile.  The last remaining profile cannot be deleted."""
    with state.lock, http_errors():
        delete_profile(state.mod_data.value, profile_name)
        state.mod_data.save()


@router.post("/{profile_name}/duplicate", response_model=ProfileOut, status_code=201)
async def duplicate_game_profile(
    profile_name: str, data: ProfileDuplicateRequest, state: State = Depends(get_state)
) -> ProfileOut:
    """Duplicate a profile under a new name."""
    with state.lock, http_errors():
        name = duplicate_profile(state.mod_data.value, profile_name, data.name)
        state.mod_data.save()
        return _profile_out(state, name)


@router.post("/{profile_name}/activate", response_model=ProfileOut)
async def activate_profile(profile_name: str, state: State = Depends(get_state)) -> ProfileOut:
    with state.lock, http_errors():
        set_active_profile(state.mod_data.value, profile_name)
        state.mod_data.save()
        return _profile_out(state, profile_name)


@router.get("/{profile_name}/enabled", response_model=EnabledModsOut)
async def enabled_mods(profile_name: str, state: State = Depends(get_state)) -> EnabledModsOut:
    """Enabled mods with effective priority, in install order."""
    with http_errors():
        ordered = get_install_order(state.mod_data.value, profile_name)
    return EnabledModsOut(
        profile_name=profile_name,
        mods=[EnabledModOut(mod=mc, effective_priority=prio) for mc, prio in ordered],
        mod_string=build_mod_string([mc for mc, _ in ordered]),
    )


@router.get("/{profile_name}/sorted", response_model=list[SortedModOut])
async def sorted_profile_mods(
    profile_name: str,
    sort_by: SortBy = Query(SortBy.Name),
    ascending: bool = Query(True),
    state: State = Depends(get_state),
    resolver: ModResolver = Depends(get_resolver),
) -> list[SortedModOut]:
    """All mods of a profile, folders flattened, in display order."""
    with http_errors():
        entries = flatten_with_info(state.mod_data.value, profile_name, resolver)
    config = SortingConfig(sort_category=sort_by, is_ascending=ascending)
    return [
        SortedModOut(mod=mc, name=info.name if info else None)
        for mc, info in sorted_mods(entries, config)
    ]
