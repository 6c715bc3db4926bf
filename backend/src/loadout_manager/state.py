"""Process-wide state: the app config and the mod data store with their files."""

from __future__ import annotations

import logging
import threading

from loadout_manager.config import Settings
from loadout_manager.models.config import Config
from loadout_manager.models.mod_data import ModData
from loadout_manager.services.migration import dump_config, dump_mod_data
from loadout_manager.services.persistence import (
    JsonFileWrapper,
    read_config_or_default,
    read_mod_data_or_default,
)

logger = logging.getLogger(__name__)


class State:
    def __init__(
        self,
        settings: Settings,
        config: JsonFileWrapper[Config],
        mod_data: JsonFileWrapper[ModData],
    ) -> None:
        self.settings = settings
        self.config = config
        self.mod_data = mod_data
        # Serializes mutate-then-save for callers running off the event loop.
        self.lock = threading.Lock()

    @classmethod
    def init(cls, settings: Settings) -> State:
        """Load (and migrate) both files, then write them back as current generation.

        Unreadable or unsupported files raise instead of being replaced
        with defaults.
        """
        config = JsonFileWrapper(
            settings.config_path, read_config_or_default(settings.config_path), dump_config
        )
        config.save()

        mod_data = JsonFileWrapper(
            settings.mod_data_path,
            read_mod_data_or_default(settings.mod_data_path, settings.legacy_profiles_path),
            dump_mod_data,
        )
        mod_data.save()

        logger.info(
            "Loaded %d profile(s) from %s, active '%s'",
            len(mod_data.value.profiles),
            settings.config_dir,
            mod_data.value.active_profile,
        )
        return cls(settings, config, mod_data)
