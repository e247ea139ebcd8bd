"""Tests for the Uvicorn runner."""

from duochat.app import App
from duochat.web import runner


class TestRunServer:
    """Tests for run_server function."""

    def test_passes_bind_address_and_ping_settings(self, config, monkeypatch):
        calls = []
        monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
        config.port = 9123
        config.ws_ping_interval = 5.0
        config.ws_ping_timeout = 7.5

        runner.run_server(App(config), config)

        (kwargs,) = calls
        assert kwargs["host"] == config.host
        assert kwargs["port"] == 9123
        assert kwargs["ws_ping_interval"] == 5.0
        assert kwargs["ws_ping_timeout"] == 7.5
        assert kwargs["log_config"]["formatters"]["default"]["fmt"] == "%(asctime)s - %(levelname)s - %(message)s"
