"""Typed errors raised by the mod data store, its migrations and persistence."""

from pathlib import Path


class LoadoutError(Exception):
    pass


class NoSuchProfileError(LoadoutError):
    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"No such profile: '{profile}'")


class DuplicateProfileNameError(LoadoutError):
    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"A profile named '{profile}' already exists")


class DuplicateGroupNameError(LoadoutError):
    def __init__(self, group_name: str) -> None:
        self.group_name = group_name
        super().__init__(f"A folder named '{group_name}' already exists")


class LastProfileError(LoadoutError):
    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"Cannot delete '{profile}': at least one profile must exist")


class InvalidNameError(LoadoutError):
    pass


class UnsupportedSchemaVersionError(LoadoutError):
    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f"Unsupported schema version: {version!r}")


class DeserializationFailedError(LoadoutError):
    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        message = f"Failed to deserialize {source}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class IoFailureError(LoadoutError):
    def __init__(self, path: Path, action: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"Failed to {action} {path}")


class GroupSortingNotSupportedError(LoadoutError):
    """Raised when the display comparator is handed a folder reference."""
