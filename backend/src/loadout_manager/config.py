import os
import sys
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "loadout-manager"


def _default_config_dir() -> Path:
    if env := os.environ.get("LOM_CONFIG_DIR"):
        return Path(env)
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_DIR_NAME


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LOM_",
        extra="ignore",
    )

    config_dir: Path = Path("")
    mod_data_filename: str = "mod_data.json"
    legacy_profiles_filename: str = "profiles.json"
    config_filename: str = "config.json"
    host: str = "127.0.0.1"
    port: int = 8426
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:1420", "https://tauri.localhost"]

    @model_validator(mode="after")
    def _resolve_config_dir(self) -> "Settings":
        if self.config_dir == Path(""):
            self.config_dir = _default_config_dir()
        return self

    @property
    def mod_data_path(self) -> Path:
        return self.config_dir / self.mod_data_filename

    @property
    def legacy_profiles_path(self) -> Path:
        return self.config_dir / self.legacy_profiles_filename

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.config_filename


settings = Settings()
