"""Application entry point for the Community backend server."""

import structlog

from community.app import App
from community.config import Config
from community.logging import setup_logging
from community.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info(
        "server_starting", host=config.host, port=config.port, session_timeout_days=config.session_timeout_days
    )
    run_server(App(config), config)


if __name__ == "__main__":
    main()
