# Area: Shared Tests
"""Tests for the command-line interface and logging setup."""

import json
import logging

import pytest

from bb_engine.cli import main, parse_args
from bb_engine.config import ENV_MAPPINGS
from bb_engine._shared.logging_config import setup_logging
from bb_engine._shared.logging_formatters import (
    JSONFormatter,
    NarrativeModeFilter,
    TerminalFormatter,
    disable_narrative_mode,
    enable_narrative_mode,
    log_context,
)


def make_record(level, msg="hello", args=None, extra=None):
    fields = {"name": "bb_engine.test", "levelno": level,
              "levelname": logging.getLevelName(level), "msg": msg, "args": args}
    fields.update(extra or {})
    return logging.makeLogRecord(fields)


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch, tmp_path):
    """setup_logging mutates the package logger; put it back afterwards."""
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    pkg_logger = logging.getLogger("bb_engine")
    level = pkg_logger.level
    yield
    for handler in list(pkg_logger.handlers):
        handler.close()
    pkg_logger.handlers.clear()
    pkg_logger.setLevel(level)
    pkg_logger.propagate = True
    disable_narrative_mode()


class TestParseArgs:
    """Argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.seed == 42
        assert args.json is False
        assert args.no_human is False

    def test_flags(self):
        args = parse_args(["--seed", "9", "--twists", "--jury-size", "5", "-v"])
        assert args.seed == 9
        assert args.twists is True
        assert args.jury_size == 5
        assert args.verbose is True


class TestMain:
    """Full runs."""

    def test_text_output(self, capsys):
        assert main(["--seed", "3", "--no-human"]) == 0
        out = capsys.readouterr().out
        assert "Winner:" in out
        assert "Runner-up:" in out

    def test_narrative_mode_reset_after_run(self, capsys):
        main(["--seed", "3", "--no-human"])
        capsys.readouterr()
        record = make_record(logging.INFO)
        assert NarrativeModeFilter().filter(record) is True

    def test_json_output(self, capsys):
        assert main(["--seed", "3", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["game"]["phase"] == "jury"
        assert data["finale"]["winner_id"] == data["archive"]["winner_id"]

    def test_same_seed_same_output(self, capsys):
        main(["--seed", "8", "--no-human"])
        first = capsys.readouterr().out
        main(["--seed", "8", "--no-human"])
        assert capsys.readouterr().out == first

    def test_invalid_override(self, capsys):
        assert main(["--jury-size", "0"]) == 1
        assert "CONFIGURATION ERROR" in capsys.readouterr().err

    def test_roster_file(self, tmp_path, capsys):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps([{"id": f"h{i}", "name": f"H{i}"} for i in range(6)]))
        assert main(["--players", str(path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["game"]["players"]) == 6

    def test_log_file(self, tmp_path, capsys):
        log_path = tmp_path / "logs" / "season.jsonl"
        assert main(["--seed", "2", "--no-human", "--log-file", str(log_path)]) == 0
        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert lines
        assert json.loads(lines[0])["logger"].startswith("bb_engine")


class TestLogging:
    """Logging setup helpers."""

    def test_setup_logging_handlers(self, tmp_path):
        setup_logging(str(tmp_path / "x.log"))
        pkg_logger = logging.getLogger("bb_engine")
        assert len(pkg_logger.handlers) == 2
        assert pkg_logger.propagate is False

    def test_narrative_mode_keeps_warnings(self):
        log_filter = NarrativeModeFilter()
        enable_narrative_mode()
        assert log_filter.filter(make_record(logging.INFO)) is False
        assert log_filter.filter(make_record(logging.WARNING)) is True
        disable_narrative_mode()
        assert log_filter.filter(make_record(logging.INFO)) is True

    def test_json_formatter(self):
        record = logging.LogRecord("bb_engine.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hello x"
        assert data["level"] == "INFO"
        assert "week" not in data

    def test_json_formatter_position(self):
        record = make_record(logging.INFO, extra=log_context(4, "live_vote"))
        data = json.loads(JSONFormatter().format(record))
        assert data["week"] == 4
        assert data["phase"] == "live_vote"

    def test_terminal_formatter_position(self):
        formatter = TerminalFormatter(fmt="%(levelname)s %(message)s")
        line = formatter.format(make_record(logging.INFO, "Phase: %s", ("hoh_comp",),
                                            extra=log_context(2, "week_start")))
        assert line.endswith("[W2 week_start] Phase: hoh_comp")
        plain = formatter.format(make_record(logging.INFO, "hello"))
        assert plain.endswith(" hello")
        assert "[W" not in plain


class TestEngineLogContext:
    """Engine log lines carry the season position."""

    def test_phase_change_record(self, caplog):
        from bb_engine._core.state import GameState, Phase, Player

        state = GameState(players=[Player(id="a", name="A"), Player(id="b", name="B")], seed=1)
        state.week = 3
        with caplog.at_level(logging.INFO, logger="bb_engine.state"):
            state.set_phase(Phase.HOH_COMP)
        record = caplog.records[-1]
        assert record.bb_week == 3
        assert record.bb_phase == "week_start"

    def test_narrative_warning_record(self, caplog):
        from bb_engine._shared.narrative import NarrativeLog

        with caplog.at_level(logging.DEBUG, logger="bb_engine.narrative"):
            NarrativeLog().push("no nominees", "warning", week=5, phase="live_vote")
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert (record.bb_week, record.bb_phase) == (5, "live_vote")
