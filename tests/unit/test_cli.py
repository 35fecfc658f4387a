"""Unit tests for the console front end."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from gamelog import cli
from gamelog.events import ERROR, GAMESTATE, LOGIN, STATUS, Event


def make_event(event_type: str, data: dict) -> Event:
    return Event(
        event_type=event_type,
        timestamp=datetime(2025, 1, 15, 10, 30, 5, tzinfo=UTC),
        source="test",
        data=data,
    )


class TestFormatEvent:
    """Test event rendering."""

    def test_gamestate(self) -> None:
        """Test a gamestate line."""
        line = cli.format_event(make_event(GAMESTATE, {"type": "QUANTUM", "value": "entered"}))
        assert line.startswith("10:30:05 gamestate")
        assert line.endswith("QUANTUM        entered")

    def test_status(self) -> None:
        """Test connected and disconnected status lines."""
        connected = cli.format_event(make_event(STATUS, {"connected": True, "path": "/g/Game.log"}))
        disconnected = cli.format_event(make_event(STATUS, {"connected": False}))

        assert connected.endswith("connected to /g/Game.log")
        assert disconnected.endswith("disconnected")

    def test_login_and_error(self) -> None:
        """Test login and error lines."""
        assert cli.format_event(make_event(LOGIN, {"status": "connected"})).endswith("login connected")
        error = cli.format_event(make_event(ERROR, {"message": "Game.log not found", "kind": "not_found"}))
        assert error.endswith("Game.log not found")

    def test_print_event_without_tty(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that colors are skipped when stdout is not a terminal."""
        cli.print_event(make_event(LOGIN, {"status": "connected"}))

        assert capsys.readouterr().out == "10:30:05 login     login connected\n"


class TestMain:
    """Test argument handling."""

    def test_parser(self) -> None:
        """Test that all options are accepted."""
        args = cli.build_parser().parse_args(
            ["--path", "/g/Game.log", "--config", "w.yaml", "--log-level", "DEBUG", "--log-dir", "/tmp/l"]
        )
        assert args.path == "/g/Game.log"
        assert args.config == "w.yaml"
        assert args.log_level == "DEBUG"
        assert args.log_dir == "/tmp/l"

    def test_bad_config_exits_with_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that configuration errors are reported instead of raised."""
        monkeypatch.setattr(cli, "setup_logging", lambda *args: None)

        code = cli.main(["--config", str(tmp_path / "absent.yaml")])

        assert code == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_runs_tailer_until_interrupted(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that main() wires the tailer to the console and exits cleanly."""
        monkeypatch.setattr(cli, "setup_logging", lambda *args: None)
        started = {}

        async def fake_run(tailer, path):
            started["path"] = path
            started["subscribers"] = tailer.bus.get_subscriber_count()
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "run", fake_run)
        config_file = tmp_path / "watcher.yaml"
        config_file.write_text("watcher:\n  poll_interval_seconds: 0.5\n")

        code = cli.main(["--config", str(config_file), "--path", "/g/Game.log"])

        assert code == 0
        assert started == {"path": "/g/Game.log", "subscribers": 4}
        assert "Watching stopped." in capsys.readouterr().out
