"""
Tests for the command line entry points.

1. run.py takes its bind defaults from settings
2. scripts.init_routing configures logging before seeding
"""
import logging
import os

import pytest

import run
from civic_queue.config.settings import settings
from civic_queue.repositories.mongo_client import ROUTE_CONFIGS
from scripts import init_routing


@pytest.fixture
def restore_root_logger():
    """setup_logging replaces the root handlers; put them back afterwards"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRunParser:
    """Tests for run.build_parser."""

    def test_defaults_follow_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "api_host", "0.0.0.0")
        monkeypatch.setattr(settings, "api_port", 9100)

        args = run.build_parser().parse_args([])

        assert (args.host, args.port, args.reload) == ("0.0.0.0", 9100, False)

    def test_flags_override_settings(self):
        args = run.build_parser().parse_args(["--host", "10.0.0.5", "--port", "8081", "--reload"])
        assert (args.host, args.port, args.reload) == ("10.0.0.5", 8081, True)

    def test_workers_flag_not_accepted(self):
        with pytest.raises(SystemExit):
            run.build_parser().parse_args(["--workers", "4"])

    def test_main_starts_uvicorn_with_app_path(self, monkeypatch):
        calls = []
        monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        assert run.main(["--port", "8090"]) == 0
        assert calls == [("civic_queue.main:app", {"host": settings.api_host, "port": 8090, "reload": False})]


class TestInitRoutingScript:
    """Tests for scripts.init_routing.main."""

    def test_seed_configures_logging(self, db, tmp_path, monkeypatch, restore_root_logger):
        monkeypatch.setattr(settings, "logs_path", str(tmp_path))
        monkeypatch.setattr(init_routing, "get_database", lambda: db)

        assert init_routing.main([]) == 0

        assert db[ROUTE_CONFIGS].count_documents({}) == 4
        assert os.path.exists(tmp_path / "error.log")
        assert any(
            getattr(handler, "baseFilename", "").endswith("error.log")
            for handler in logging.getLogger().handlers
        )

    def test_show_prints_without_seeding(self, db, tmp_path, monkeypatch, capsys, restore_root_logger):
        monkeypatch.setattr(settings, "logs_path", str(tmp_path))
        monkeypatch.setattr(init_routing, "get_database", lambda: db)

        assert init_routing.main(["--show"]) == 0

        assert "[road-pothole] Municipal Roads Department" in capsys.readouterr().out
        assert db[ROUTE_CONFIGS].count_documents({}) == 0
