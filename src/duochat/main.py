"""Application entry point for the duochat server."""

from duochat.app import App
from duochat.config import Config
from duochat.logging import setup_logging
from duochat.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
