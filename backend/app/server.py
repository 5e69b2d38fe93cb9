"""Process entry point: serves app.main:app with uvicorn on the configured host/port."""

import uvicorn

from app.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # setup_logging owns the root logger
    )


if __name__ == "__main__":
    run()
