"""Entry point for the content console API server."""

import uvicorn

from console_api.app import create_app
from console_api.config import Settings
from console_api.logging import configure_logging


def main() -> None:
    """Entry point for python -m console_api."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.log_json)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )


if __name__ == "__main__":
    main()
