import json
import logging
import pathlib
import sys

import pytest
import structlog

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_solver.log import resolve_log_level, setup_logging
from rummy_solver.solver import SolveStatus


def test_setup_logging_routes_to_stderr(capsys):
    setup_logging(level=logging.INFO)
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1

    structlog.get_logger("test.console").info("solve.done", groups=2)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "solve.done" in captured.err


def test_json_mode_serializes_enums(capsys):
    setup_logging(level=logging.INFO, json_mode=True)
    structlog.get_logger("test.json").info("solve.done", status=SolveStatus.PARTIAL)
    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "solve.done"
    assert payload["status"] == "PARTIAL"
    assert payload["level"] == "info"


def test_level_filters_debug(capsys):
    setup_logging(level=logging.WARNING)
    structlog.get_logger("test.filter").info("hidden")
    assert "hidden" not in capsys.readouterr().err


def test_resolve_log_level():
    assert resolve_log_level("debug") == logging.DEBUG
    with pytest.raises(ValueError):
        resolve_log_level("loud")
