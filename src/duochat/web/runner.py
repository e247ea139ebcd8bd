"""Uvicorn server runner for the chat app."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from duochat.app import App
from duochat.config import Config
from duochat.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Run Uvicorn with compact log formats and keepalive pings on the chat socket."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = LOGGING_CONFIG.copy()
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        access_log=True,
        ws_ping_interval=config.ws_ping_interval,
        ws_ping_timeout=config.ws_ping_timeout,
    )
