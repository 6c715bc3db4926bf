"""Endpoints for persisted UI preferences."""

from fastapi import APIRouter, Depends

from loadout_manager.routers.deps import get_state, http_errors
from loadout_manager.schemas.sorting import SortingConfig
from loadout_manager.state import State

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/sorting", response_model=SortingConfig | None)
async def get_sorting(state: State = Depends(get_state)) -> SortingConfig | None:
    """Current sort column, or ``null`` for manual (stored) order."""
    return state.config.value.sorting_config


@router.put("/sorting", response_model=SortingConfig | None)
async def put_sorting(
    data: SortingConfig | None = None, state: State = Depends(get_state)
) -> SortingConfig | None:
    with state.lock, http_errors():
        state.config.value.sorting_config = data
        state.config.save()
    return data
