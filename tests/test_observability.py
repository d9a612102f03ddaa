"""
Tests for observability — pass diagnostics and logging setup.
"""

import logging

import pytest

from buildergen.core.observability.diagnostics import Diagnostic, Diagnostics
from buildergen.core.observability.logging_config import parse_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ── Diagnostics ─────────────────────────────────────────────────────


class TestDiagnostic:
    def test_timestamp_filled(self):
        d = Diagnostic(level="info", message="m")
        assert d.timestamp

    def test_to_dict(self):
        d = Diagnostic(level="warning", message="m", subject="a.B", timestamp="t")
        assert d.to_dict() == {
            "level": "warning",
            "message": "m",
            "subject": "a.B",
            "timestamp": "t",
        }


class TestDiagnostics:
    def test_entries_in_order(self):
        diag = Diagnostics()
        diag.info("one")
        diag.warning("two", subject="a.Shape")
        diag.error("three")
        assert [e.level for e in diag.entries] == ["info", "warning", "error"]
        assert diag.warnings[0].subject == "a.Shape"
        assert [e.message for e in diag.errors] == ["three"]

    def test_to_dict_counts(self):
        diag = Diagnostics()
        diag.warning("w1")
        diag.warning("w2")
        data = diag.to_dict()
        assert data["warnings"] == 2
        assert data["errors"] == 0
        assert len(data["entries"]) == 2

    def test_forwards_to_logger(self, caplog):
        diag = Diagnostics(logger_name="buildergen.test")
        with caplog.at_level(logging.INFO, logger="buildergen.test"):
            diag.warning("a.Shape is not a class")
            diag.info("done")
        levels = [(r.name, r.levelno) for r in caplog.records]
        assert levels == [
            ("buildergen.test", logging.WARNING),
            ("buildergen.test", logging.INFO),
        ]

    def test_instances_do_not_share_entries(self):
        a = Diagnostics()
        b = Diagnostics()
        a.warning("only in a")
        assert b.entries == []


# ── Logging setup ───────────────────────────────────────────────────


class TestParseLevel:
    @pytest.mark.parametrize("name,expected", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("Error", logging.ERROR),
        (None, logging.WARNING),
        ("", logging.WARNING),
        ("LOUD", logging.WARNING),
        ("BASIC_FORMAT", logging.WARNING),
    ])
    def test_levels(self, name, expected):
        assert parse_level(name) == expected


class TestSetupLogging:
    def test_console_level(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler_more_verbose(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "buildergen.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("buildergen.test").debug("to file only")
        for handler in root.handlers:
            handler.flush()
        assert "to file only" in log_file.read_text(encoding="utf-8")

    def test_file_level_defaults_to_console(self, restore_root_logger, tmp_path):
        setup_logging("ERROR", log_file=str(tmp_path / "x.log"))
        assert all(h.level == logging.ERROR for h in restore_root_logger.handlers)
