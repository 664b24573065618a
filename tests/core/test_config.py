"""Tests for configuration loading."""

import os
from unittest.mock import patch

import pytest

from sksonic.core.config import (
    Config,
    ConfigError,
    get_log_file_path,
    load_config,
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point XDG dirs at tmp_path and clear SKSONIC_* overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for name in ("SKSONIC_URL", "SKSONIC_USER", "SKSONIC_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, text: str):
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_file(self, tmp_path) -> None:
        path = tmp_path / "new" / "config.toml"
        config = load_config(path)
        assert path.exists()
        assert config == Config()

    def test_default_file_round_trips(self, tmp_path) -> None:
        path = tmp_path / "config.toml"
        load_config(path)
        assert load_config(path) == Config()

    def test_default_spawn_wait_is_short(self, tmp_path) -> None:
        """Starting a song blocks the input loop for a fraction of a second at most."""
        config = load_config(tmp_path / "config.toml")
        assert config.player.spawn_timeout == 0.2
        assert config.player.spawn_timeout < config.ui.input_timeout

    def test_sections(self, tmp_path) -> None:
        path = _write(
            tmp_path,
            """
[server]
url = "https://music.example.org/"
port = 443
user = "alice"
password = "pw"

[player]
executable = "mpv"
flags = "--no-video"

[ui]
bottom_space = 5

[ui.indicators]
played = "="

[keys]
w = "playlist_view"

[notifications]
command = "notify-send"

[state_dump]
path = "~/state.json"

[logging]
level = "debug"
""",
        )
        config = load_config(path)
        assert config.server.url == "https://music.example.org"
        assert config.server.port == 443
        assert config.player.executable == "mpv"
        assert config.ui.bottom_space == 5
        assert config.ui.indicators.played == "="
        assert config.ui.indicators.unplayed == "-"
        assert config.keys == {"w": "playlist_view"}
        assert config.notifications.command == "notify-send"
        assert not config.state_dump.path.startswith("~")
        assert config.logging.level == "DEBUG"

    def test_environment_overrides(self, tmp_path, monkeypatch) -> None:
        path = _write(tmp_path, '[server]\nuser = "file-user"\n')
        monkeypatch.setenv("SKSONIC_USER", "env-user")
        monkeypatch.setenv("SKSONIC_PASSWORD", "env-pw")
        config = load_config(path)
        assert config.server.user == "env-user"
        assert config.server.password == "env-pw"

    def test_dotenv_file(self, tmp_path) -> None:
        env_dir = tmp_path / "config" / "sksonic"
        env_dir.mkdir(parents=True)
        (env_dir / ".env").write_text("SKSONIC_PASSWORD=from-dotenv\n")
        path = _write(tmp_path, "")
        # load_dotenv writes to os.environ directly
        with patch.dict(os.environ):
            config = load_config(path)
        assert config.server.password == "from-dotenv"


class TestInvalidConfig:
    """Invalid files raise ConfigError."""

    @pytest.mark.parametrize(
        "text",
        [
            "[server\nurl = 1",
            "[server]\ntimeout = -1",
            "[player]\nspawn_timeout = -0.5",
            '[player]\nexecutable = ""',
            "[ui]\ninput_timeout = 0",
            "[ui]\nbottom_space = 2",
            '[ui]\nbottom_space = "tall"',
        ],
    )
    def test_rejected(self, tmp_path, text: str) -> None:
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, text))


class TestLogFilePath:
    """Tests for get_log_file_path."""

    def test_default_under_data_dir(self, tmp_path) -> None:
        assert get_log_file_path(Config()) == tmp_path / "data" / "sksonic" / "sksonic.log"

    def test_custom(self, tmp_path) -> None:
        config = Config()
        config.logging.log_file = str(tmp_path / "x.log")
        assert get_log_file_path(config) == tmp_path / "x.log"
