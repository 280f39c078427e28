"""Run the URL shortener with uvicorn: ``python -m app``."""

import uvicorn

from app.core.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # logging is routed through loguru by app.core.logging
    )


if __name__ == "__main__":
    main()
