"""Shared FastAPI dependencies used across routers."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request

from loadout_manager.errors import (
    DuplicateGroupNameError,
    DuplicateProfileNameError,
    InvalidNameError,
    LastProfileError,
    LoadoutError,
    NoSuchProfileError,
)
from loadout_manager.services.resolver import ModResolver, StaticResolver
from loadout_manager.state import State

_STATUS_CODES: list[tuple[type[LoadoutError], int]] = [
    (NoSuchProfileError, 404),
    (DuplicateProfileNameError, 409),
    (DuplicateGroupNameError, 409),
    (LastProfileError, 409),
    (InvalidNameError, 422),
]


def get_state(request: Request) -> State:
    return request.app.state.loadout


def get_resolver(request: Request) -> ModResolver:
    resolver = getattr(request.app.state, "resolver", None)
    return resolver if resolver is not None else StaticResolver()


@contextmanager
def http_errors() -> Iterator[None]:
    """Translate store errors into HTTP responses."""
    try:
        yield
    except LoadoutError as exc:
        status = next((code for kind, code in _STATUS_CODES if isinstance(exc, kind)), 500)
        raise HTTPException(status, str(exc)) from exc


def save_if_changed(state: State, changed: bool) -> None:
    if changed:
        state.mod_data.save()
