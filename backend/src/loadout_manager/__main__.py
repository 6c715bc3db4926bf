"""Entry point for standalone backend process."""

import uvicorn

from loadout_manager.config import settings
from loadout_manager.main import app


def main() -> None:
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
