# ABOUTME: Tests for ClientConfiguration
# ABOUTME: Validates defaults, TOML loading, environment overrides and validation

import logging

import pytest
from pathlib import Path

from session.game_configuration import ClientConfiguration
from session.game_session import INITIAL_SCREEN_ID


class TestClientConfiguration:
    def test_defaults(self):
        config = ClientConfiguration()

        assert config.api_base_url == "https://text-adventure.winsauce.com/api"
        assert config.initial_screen_id == INITIAL_SCREEN_ID
        assert config.request_timeout_seconds == 30.0
        assert config.log_level == "WARNING"
        assert config.log_level_number == logging.WARNING

    def test_env_vars_override_defaults(self, monkeypatch):
        monkeypatch.setenv("ADVENTURE_API_BASE_URL", "http://localhost:3000/api")
        monkeypatch.setenv("ADVENTURE_REQUEST_TIMEOUT_SECONDS", "2.5")

        config = ClientConfiguration()

        assert config.api_base_url == "http://localhost:3000/api"
        assert config.request_timeout_seconds == 2.5

    def test_extra_fields_are_forbidden(self):
        with pytest.raises(Exception) as exc_info:
            ClientConfiguration(api_base_ulr="typo")

        assert "extra_forbidden" in str(exc_info.value) or "Extra inputs are not permitted" in str(exc_info.value)

    def test_timeout_must_be_positive(self):
        with pytest.raises(Exception):
            ClientConfiguration(request_timeout_seconds=0)

    def test_log_level_is_normalized(self):
        assert ClientConfiguration(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(Exception, match="Unknown log level"):
            ClientConfiguration(log_level="chatty")

    def test_from_toml_loads_configuration(self, tmp_path):
        toml_content = """
[tool.adventure.server]
api_base_url = "http://localhost:8080/api"
initial_screen_id = "start-here"
request_timeout_seconds = 10.0

[tool.adventure.files]
log_file = "client.log"
json_log_file = "client.jsonl"

[tool.adventure.logging]
level = "info"
"""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(toml_content)

        config = ClientConfiguration.from_toml(config_file)

        assert config.api_base_url == "http://localhost:8080/api"
        assert config.initial_screen_id == "start-here"
        assert config.request_timeout_seconds == 10.0
        assert config.log_file == "client.log"
        assert config.json_log_file == "client.jsonl"
        assert config.log_level == "INFO"

    def test_from_toml_partial_section_uses_defaults(self, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.adventure.server]\ninitial_screen_id = "abc"\n')

        config = ClientConfiguration.from_toml(config_file)

        assert config.initial_screen_id == "abc"
        assert config.api_base_url == "https://text-adventure.winsauce.com/api"

    def test_from_toml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ClientConfiguration.from_toml(tmp_path / "nope.toml")

    def test_from_toml_missing_section(self, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[project]\nname = "other"\n')

        with pytest.raises(KeyError, match="tool.adventure"):
            ClientConfiguration.from_toml(config_file)

    def test_repository_pyproject_is_loadable(self):
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        config = ClientConfiguration.from_toml(pyproject)
        assert config.initial_screen_id == INITIAL_SCREEN_ID
