# ABOUTME: Tests for the interactive command loop and CLI configuration handling
# ABOUTME: Drives run() with scripted input and checks printed output and error recovery

import argparse
import sys

import pytest

import main
from errors import TransportError
from session.game_session import INITIAL_SCREEN_ID
from tests.fixtures import failure_response, navigation_response, CAVE_SCREEN


def script_input(monkeypatch, lines):
    feed = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestRunLoop:
    def test_prints_outcomes_until_quit(self, session, fake_client, monkeypatch, capsys):
        fake_client.queue(failure_response("You can't fly."), navigation_response(CAVE_SCREEN, []))
        script_input(monkeypatch, ["fly", "go north", "/screen", "/quit", "never read"])

        main.run(session)

        output = capsys.readouterr().out
        assert "You can't fly." in output
        assert "You are in a cave." in output
        assert "\nX\n" in output
        assert len(fake_client.requests) == 2

    def test_eof_ends_loop(self, session, monkeypatch):
        script_input(monkeypatch, [])
        main.run(session)

    def test_client_errors_are_reported_and_loop_continues(
        self, session, fake_client, monkeypatch, capsys
    ):
        fake_client.queue(TransportError("connection reset"), failure_response("Still no."))
        script_input(monkeypatch, ["fly", "fly"])

        main.run(session)

        output = capsys.readouterr().out
        assert "Error: connection reset" in output
        assert "Still no." in output

    def test_decode_errors_are_recoverable(self, session, fake_client, monkeypatch, capsys):
        fake_client.queue(navigation_response(CAVE_SCREEN, [], state="%%%"))
        script_input(monkeypatch, ["go north", "/screen"])

        main.run(session)

        output = capsys.readouterr().out
        assert "Could not read the game state" in output
        assert session.current_screen_id() != "X"


class TestLoadConfiguration:
    def test_cli_overrides(self, tmp_path):
        args = argparse.Namespace(
            config=str(tmp_path / "missing.toml"),
            base_url="http://localhost:9999/api",
            screen_id="custom",
            log_level="debug",
        )
        config = main.load_configuration(args)

        assert config.api_base_url == "http://localhost:9999/api"
        assert config.initial_screen_id == "custom"
        assert config.log_level == "DEBUG"

    def test_reads_toml_when_present(self, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.adventure.server]\ninitial_screen_id = "from-toml"\n')
        args = argparse.Namespace(
            config=str(config_file), base_url=None, screen_id=None, log_level=None
        )

        assert main.load_configuration(args).initial_screen_id == "from-toml"

    def test_default_pyproject_without_section_falls_back_to_defaults(
        self, tmp_path, monkeypatch, caplog
    ):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "someone-else"\n')
        monkeypatch.chdir(tmp_path)
        args = argparse.Namespace(config=None, base_url=None, screen_id=None, log_level=None)

        config = main.load_configuration(args)

        assert config.initial_screen_id == INITIAL_SCREEN_ID
        assert config.api_base_url == "https://text-adventure.winsauce.com/api"
        assert "tool.adventure" in caplog.text

    def test_explicit_config_without_section_raises(self, tmp_path):
        config_file = tmp_path / "other.toml"
        config_file.write_text('[project]\nname = "someone-else"\n')
        args = argparse.Namespace(
            config=str(config_file), base_url=None, screen_id=None, log_level=None
        )

        with pytest.raises(KeyError, match="tool.adventure"):
            main.load_configuration(args)


class TestMainExitCodes:
    def test_invalid_log_level_exits_with_status_1(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(sys, "argv", ["adventure", "--log-level", "chatty"])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_invalid_env_value_exits_with_status_1(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ADVENTURE_REQUEST_TIMEOUT_SECONDS", "soon")
        monkeypatch.setattr(sys, "argv", ["adventure"])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_explicit_config_without_section_exits_with_status_1(
        self, tmp_path, monkeypatch
    ):
        config_file = tmp_path / "other.toml"
        config_file.write_text('[project]\nname = "someone-else"\n')
        monkeypatch.setattr(sys, "argv", ["adventure", "--config", str(config_file)])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1
