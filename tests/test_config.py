"""Tests for configuration settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mail_hostauth.config import ConnectionConfig, Settings, get_settings_eager
from mail_hostauth.exceptions import ConfigError


class TestConnectionConfig:
    def test_valid(self) -> None:
        config = ConnectionConfig(id="work-imap", connection="imap+ssl+://alice@mail.example.com")

        assert config.id == "work-imap"
        assert config.connection == "imap+ssl+://alice@mail.example.com"

    def test_invalid_connection_string(self) -> None:
        with pytest.raises(ValidationError, match="expected 'scheme://host'"):
            ConnectionConfig(id="work", connection="mail.example.com")

    def test_invalid_id(self) -> None:
        with pytest.raises(ValidationError):
            ConnectionConfig(id="1work", connection="imap://mail.example.com")


class TestSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.connections == []
        assert settings.log_level == "WARNING"

    def test_log_level_from_env(self, tmp_path: Path) -> None:
        env = {"HOSTAUTH_LOG_LEVEL": "debug"}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_duplicate_connection_ids(self) -> None:
        with pytest.raises(ValidationError, match="duplicate connection id 'work'"):
            Settings(
                connections=[
                    {"id": "work", "connection": "imap://mail.example.com"},
                    {"id": "work", "connection": "smtp://mail.example.com"},
                ]
            )


class TestYamlConfigLoading:
    def test_load_from_config_file_env(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(
            "log_level: INFO\n"
            "connections:\n"
            "  - id: work-imap\n"
            "    connection: imap+ssl+://alice@mail.example.com\n"
            "  - id: work-smtp\n"
            "    connection: smtp+tls+://alice@mail.example.com\n"
        )
        env = {"HOSTAUTH_CONFIG_FILE": str(config_file)}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.log_level == "INFO"
        assert [c.id for c in settings.connections] == ["work-imap", "work-smtp"]
        assert settings.connections[1].connection == "smtp+tls+://alice@mail.example.com"

    def test_load_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "hostauth.yaml").write_text("log_level: ERROR\n")
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.log_level == "ERROR"

    def test_load_from_xdg_config_home(self, tmp_path: Path) -> None:
        xdg_dir = tmp_path / "xdg"
        config_dir = xdg_dir / "mail-hostauth"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("log_level: DEBUG\n")
        env = {"XDG_CONFIG_HOME": str(xdg_dir)}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path / "nonexistent"),
        ):
            settings = Settings()

        assert settings.log_level == "DEBUG"

    def test_config_file_env_takes_precedence_over_cwd(self, tmp_path: Path) -> None:
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("log_level: CRITICAL\n")
        (tmp_path / "hostauth.yaml").write_text("log_level: INFO\n")
        env = {"HOSTAUTH_CONFIG_FILE": str(explicit)}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.log_level == "CRITICAL"

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "hostauth.yaml").write_text("log_level: INFO\n")
        env = {"HOSTAUTH_LOG_LEVEL": "ERROR"}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.log_level == "ERROR"

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "hostauth.yaml").write_text("")
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            settings = Settings()

        assert settings.connections == []

    def test_invalid_yaml_reports_location(self, tmp_path: Path) -> None:
        config_file = tmp_path / "hostauth.yaml"
        config_file.write_text("connections:\n  - id: work\n    connection: [unclosed\n")
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            with pytest.raises(ConfigError, match="Invalid YAML syntax") as exc_info:
                Settings()

        assert str(config_file) in str(exc_info.value)
        assert "at line" in str(exc_info.value)

    def test_non_mapping_top_level(self, tmp_path: Path) -> None:
        (tmp_path / "hostauth.yaml").write_text("- just\n- a list\n")
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            with pytest.raises(ConfigError, match="Top level must be a mapping"):
                Settings()


class TestGetSettingsEager:
    def _load(self, tmp_path: Path, content: str) -> Settings:
        (tmp_path / "hostauth.yaml").write_text(content)
        with (
            patch.dict(os.environ, {}, clear=True),
            patch("pathlib.Path.home", return_value=tmp_path),
            patch("pathlib.Path.cwd", return_value=tmp_path),
        ):
            return get_settings_eager()

    def test_valid(self, tmp_path: Path) -> None:
        settings = self._load(
            tmp_path, "connections:\n  - id: work\n    connection: imap://mail.example.com\n"
        )

        assert settings.connections[0].id == "work"

    def test_missing_connection_field(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="missing required field 'connection'"):
            self._load(tmp_path, "connections:\n  - id: work\n")

    def test_invalid_id(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Connection ID must start with a letter"):
            self._load(
                tmp_path, "connections:\n  - id: 1work\n    connection: imap://mail.example.com\n"
            )

    def test_invalid_connection_string(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="connections.0.connection"):
            self._load(tmp_path, "connections:\n  - id: work\n    connection: imap:nohost\n")
