"""Endpoints for mod entries at the root of a profile."""

from fastapi import APIRouter, Depends

from loadout_manager.models.mod_data import ModSpecification
from loadout_manager.routers.deps import get_state, http_errors, save_if_changed
from loadout_manager.schemas.profile import (
    ModsAddRequest,
    ModsAddResult,
    ModUpdate,
    MutationResult,
    ReorderRequest,
)
from loadout_manager.services.profile_service import (
    add_mods,
    delete_mod,
    reorder_mod,
    set_mod_enabled,
    set_mod_priority,
)
from loadout_manager.state import State

router = APIRouter(prefix="/profiles/{profile_name}/mods", tags=["mods"])


def _parse_specs(urls: list[str]) -> list[ModSpecification]:
    return [ModSpecification(url=url.strip()) for url in urls if url.strip()]


@router.post("/", response_model=ModsAddResult, status_code=201)
async def add_profile_mods(
    profile_name: str, data: ModsAddRequest, state: State = Depends(get_state)
) -> ModsAddResult:
    """Append mods by URL, skipping ones already in the profile."""
    specs = _parse_specs(data.urls)
    with state.lock, http_errors():
        added = add_mods(state.mod_data.value, profile_name, specs)
        save_if_changed(state, added > 0)
    return ModsAddResult(added=added, skipped=len(specs) - added)


# Register /reorder BEFORE /{row_index} to avoid path conflict
@router.post("/reorder", response_model=MutationResult)
async def reorder_profile_mods(
    profile_name: str, data: ReorderRequest, state: State = Depends(get_state)
) -> MutationResult:
    """Drag a root row (mod or folder) to another position."""
    with state.lock, http_errors():
        changed = reorder_mod(state.mod_data.value, profile_name, data.from_index, data.to_index)
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.patch("/{row_index}", response_model=MutationResult)
async def update_mod(
    profile_name: str, row_index: int, data: ModUpdate, state: State = Depends(get_state)
) -> MutationResult:
    """Toggle a mod or set its own priority; ``group_name`` addresses a folder member."""
    mod_data = state.mod_data.value
    changed = False
    with state.lock, http_errors():
        if data.enabled is not None:
            changed |= set_mod_enabled(
                mod_data, profile_name, row_index, data.enabled, group_name=data.group_name
            )
        if data.priority is not None:
            changed |= set_mod_priority(
                mod_data, profile_name, row_index, data.priority, group_name=data.group_name
            )
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.delete("/{row_index}", response_model=MutationResult)
async def remove_mod(
    profile_name: str, row_index: int, state: State = Depends(get_state)
) -> MutationResult:
    with state.lock, http_errors():
        changed = delete_mod(state.mod_data.value, profile_name, row_index)
        save_if_changed(state, changed)
    return MutationResult(changed=changed)
