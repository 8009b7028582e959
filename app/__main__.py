"""Run the HTTP server: `python -m app`."""

from __future__ import annotations

import uvicorn

from app.core.logging import setup_logging
from app.core.settings import get_settings


def main() -> None:
    setup_logging()
    settings = get_settings()
    # log_config=None keeps our JSON logging instead of uvicorn's default formatters.
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
