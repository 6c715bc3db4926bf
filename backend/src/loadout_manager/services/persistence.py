"""File I/O for the mod data store and the app config.

Writes go to a temporary file beside the target which is then renamed over
it, so a crash mid-write leaves either the old or the new file, never a
truncated one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generic, TypeVar

from loadout_manager.errors import IoFailureError
from loadout_manager.models.config import Config
from loadout_manager.models.mod_data import DEFAULT_PROFILE, ModData, ModProfile
from loadout_manager.services.migration import dump_mod_data, load_config, load_mod_data

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _target_mode(path: Path) -> int:
    """Mode the replaced file should end up with: the old one, else the umask default."""
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, data: bytes) -> None:
    """Replace *path* with *data* in one rename."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise IoFailureError(path, "write") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise IoFailureError(path, "write") from exc
    logger.debug("Wrote %d bytes to %s", len(data), path)


def _read_bytes(path: Path) -> bytes | None:
    """Return the file contents, or ``None`` if it does not exist."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise IoFailureError(path, "read") from exc


def _ensure_active_profile(data: ModData) -> ModData:
    if not data.profiles:
        logger.warning("Mod data has no profiles, adding '%s'", DEFAULT_PROFILE)
        data.profiles[DEFAULT_PROFILE] = ModProfile()
    if data.active_profile not in data.profiles:
        fallback = min(data.profiles)
        logger.warning(
            "Active profile '%s' does not exist, using '%s'", data.active_profile, fallback
        )
        data.active_profile = fallback
    return data


def read_mod_data_or_default(mod_data_path: Path, legacy_profiles_path: Path) -> ModData:
    """Load and migrate the mod data store.

    Falls back to the pre-``mod_data.json`` profiles file.  That file is
    removed only after its migrated content was written to *mod_data_path*.
    With neither file present a fresh store with a single empty ``default``
    profile is returned.
    """
    raw = _read_bytes(mod_data_path)
    if raw is not None:
        return _ensure_active_profile(load_mod_data(raw, source=str(mod_data_path)))

    raw = _read_bytes(legacy_profiles_path)
    if raw is None:
        logger.info("No mod data found, starting with a default profile")
        return ModData()

    mod_data = _ensure_active_profile(load_mod_data(raw, source=str(legacy_profiles_path)))
    write_atomic(mod_data_path, dump_mod_data(mod_data))
    try:
        legacy_profiles_path.unlink()
    except OSError as exc:
        raise IoFailureError(legacy_profiles_path, "remove") from exc
    logger.info("Migrated legacy profiles from %s", legacy_profiles_path)
    return mod_data


def read_config_or_default(config_path: Path) -> Config:
    raw = _read_bytes(config_path)
    if raw is None:
        return Config()
    return load_config(raw, source=str(config_path))


class JsonFileWrapper(Generic[T]):
    """A value bound to the file it is saved to."""

    def __init__(self, path: Path, value: T, dump: Callable[[T], bytes]) -> None:
        self.path = Path(path)
        self.value = value
        self._dump = dump

    def save(self) -> None:
        write_atomic(self.path, self._dump(self.value))
