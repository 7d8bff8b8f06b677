"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from puzzle_galaxy.config import GalaxyConfig
from puzzle_galaxy.logging_config import get_logger, reset_logging, setup_logging


@pytest.fixture(autouse=True)
def _restore_levels():
    names = ("puzzle_galaxy", "httpx", "httpcore")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    reset_logging()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def _ours(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if h.get_name() == "puzzle_galaxy"]


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_level_follows_verbosity(self, verbosity, level):
        assert setup_logging(verbosity).level == level

    def test_accepts_config_verbosity(self):
        config = GalaxyConfig(verbosity="quiet")
        assert setup_logging(config.verbosity).level == logging.ERROR

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError):
            setup_logging("loud")

    def test_repeat_calls_replace_handlers(self):
        setup_logging("verbose")
        logger = setup_logging("normal")
        handlers = _ours(logger)
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)

    def test_httpx_request_lines_only_when_verbose(self):
        setup_logging("normal")
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging("verbose")
        assert logging.getLogger("httpx").level == logging.INFO
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_log_file_receives_records(self, tmp_path):
        path = tmp_path / "galaxy.log"
        setup_logging("verbose", log_file=path)
        get_logger("live.channel").debug("Reconnecting in %.1fs", 5.0)
        reset_logging()
        text = path.read_text(encoding="utf-8")
        assert "puzzle_galaxy.live.channel - DEBUG - Reconnecting in 5.0s" in text

    def test_reset_removes_handlers(self):
        setup_logging("normal", log_file=None)
        reset_logging()
        assert _ours(logging.getLogger("puzzle_galaxy")) == []
        assert _ours(logging.getLogger("httpx")) == []


class TestGetLogger:
    def test_prefixes_bare_names(self):
        assert get_logger("graph").name == "puzzle_galaxy.graph"

    def test_keeps_module_names(self):
        assert get_logger("puzzle_galaxy.live.channel").name == "puzzle_galaxy.live.channel"

    def test_root(self):
        assert get_logger().name == "puzzle_galaxy"
