"""Endpoints for folders inside a profile."""

from fastapi import APIRouter, Depends, HTTPException

from loadout_manager.routers.deps import get_state, http_errors, save_if_changed
from loadout_manager.schemas.profile import (
    GroupCreate,
    GroupMoveRequest,
    GroupUpdate,
    MutationResult,
    ReorderRequest,
)
from loadout_manager.services.profile_service import (
    create_group,
    delete_group,
    delete_mod_in_group,
    move_mod_between_groups,
    move_mod_out_of_group,
    move_mod_to_group,
    rename_group,
    reorder_mod_in_group,
    set_group_enabled,
    set_group_priority_override,
)
from loadout_manager.state import State

router = APIRouter(prefix="/profiles/{profile_name}/groups", tags=["groups"])


@router.post("/", response_model=MutationResult, status_code=201)
async def add_group(
    profile_name: str, data: GroupCreate, state: State = Depends(get_state)
) -> MutationResult:
    """Create an empty folder at the end of the profile."""
    with state.lock, http_errors():
        create_group(state.mod_data.value, profile_name, data.name)
        state.mod_data.save()
    return MutationResult(changed=True)


# Register /move BEFORE /{group_name} to avoid path conflict
@router.post("/move", response_model=MutationResult)
async def move_mod(
    profile_name: str, data: GroupMoveRequest, state: State = Depends(get_state)
) -> MutationResult:
    """Move a mod into, out of, or between folders."""
    mod_data = state.mod_data.value
    with state.lock, http_errors():
        match data.action:
            case "to_group":
                if data.to_group is None:
                    raise HTTPException(422, "to_group is required")
                changed = move_mod_to_group(mod_data, profile_name, data.mod_index, data.to_group)
            case "out_of_group":
                if data.from_group is None:
                    raise HTTPException(422, "from_group is required")
                changed = move_mod_out_of_group(
                    mod_data, profile_name, data.from_group, data.mod_index
                )
            case "between_groups":
                if data.from_group is None or data.to_group is None:
                    raise HTTPException(422, "from_group and to_group are required")
                changed = move_mod_between_groups(
                    mod_data, profile_name, data.from_group, data.mod_index, data.to_group
                )
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.patch("/{group_name}", response_model=MutationResult)
async def update_group(
    profile_name: str,
    group_name: str,
    data: GroupUpdate,
    state: State = Depends(get_state),
) -> MutationResult:
    """Toggle, set the priority override of, or rename a folder."""
    mod_data = state.mod_data.value
    changed = False
    with state.lock, http_errors():
        # Rename first so a rejected name leaves the folder untouched
        if data.name is not None and rename_group(mod_data, profile_name, group_name, data.name):
            group_name = data.name.strip()
            changed = True
        if data.enabled is not None:
            changed |= set_group_enabled(mod_data, profile_name, group_name, data.enabled)
        if data.clear_priority_override:
            changed |= set_group_priority_override(mod_data, profile_name, group_name, None)
        elif data.priority_override is not None:
            changed |= set_group_priority_override(
                mod_data, profile_name, group_name, data.priority_override
            )
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.delete("/{group_name}", response_model=MutationResult)
async def remove_group(
    profile_name: str, group_name: str, state: State = Depends(get_state)
) -> MutationResult:
    """Delete a folder; its mods move to the end of the profile."""
    with state.lock, http_errors():
        changed = delete_group(state.mod_data.value, profile_name, group_name)
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.delete("/{group_name}/mods/{mod_index}", response_model=MutationResult)
async def remove_group_mod(
    profile_name: str, group_name: str, mod_index: int, state: State = Depends(get_state)
) -> MutationResult:
    with state.lock, http_errors():
        changed = delete_mod_in_group(state.mod_data.value, profile_name, group_name, mod_index)
        save_if_changed(state, changed)
    return MutationResult(changed=changed)


@router.post("/{group_name}/reorder", response_model=MutationResult)
async def reorder_group_mods(
    profile_name: str, group_name: str, data: ReorderRequest, state: State = Depends(get_state)
) -> MutationResult:
    with state.lock, http_errors():
        changed = reorder_mod_in_group(
            state.mod_data.value, profile_name, group_name, data.from_index, data.to_index
        )
        save_if_changed(state, changed)
    return MutationResult(changed=changed)
