"""
Configuration management for sksonic
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


class ConfigError(Exception):
    """Raised when the configuration file holds invalid values."""

    pass


@dataclass
class ServerConfig:
    """Connection settings for the Subsonic-compatible server."""

    url: str = "http://localhost"
    port: Optional[int] = 4533
    user: str = ""
    password: str = ""
    api_version: str = "1.16.1"
    client: str = "sksonic"
    timeout: float = 30.0  # Seconds per HTTP request


@dataclass
class PlayerConfig:
    """Configuration for the external audio player."""

    executable: str = "ffplay"
    flags: str = "-nodisp -autoexit -loglevel quiet"
    spawn_timeout: float = 0.2  # Seconds play() may block waiting for the player PID


@dataclass
class IndicatorConfig:
    """Characters used by the playback bar and the playlist view."""

    playing: str = ">"
    repeat: str = "R"
    shuffle: str = "X"
    played: str = "#"
    unplayed: str = "-"


@dataclass
class UIConfig:
    """Configuration for the terminal interface."""

    input_timeout: float = 0.5  # Seconds the main loop blocks on input
    bottom_space: int = 4  # Rows reserved for the playback area
    use_colors: bool = True
    indicators: IndicatorConfig = field(default_factory=IndicatorConfig)


@dataclass
class NotificationsConfig:
    """Command invoked on every track change (None disables it)."""

    command: Optional[str] = None


@dataclass
class StateDumpConfig:
    """File overwritten with the playback state on every transition."""

    path: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/sksonic/sksonic.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of rotated files to keep


@dataclass
class Config:
    """Main configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    keys: Dict[str, str] = field(default_factory=dict)  # key token -> action name
    chords: Dict[str, str] = field(default_factory=dict)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    state_dump: StateDumpConfig = field(default_factory=StateDumpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "sksonic"
    return Path.home() / ".config" / "sksonic"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the current working directory first, then
    falls back to XDG_CONFIG_HOME/sksonic (or ~/.config/sksonic).
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config
    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "sksonic"
    return Path.home() / ".local" / "share" / "sksonic"


def get_log_file_path(config: Config) -> Path:
    """Resolve the log file, honouring [logging] log_file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "sksonic.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# sksonic configuration

[server]
# Subsonic-compatible server (Navidrome, Airsonic, Gonic, ...)
url = "http://localhost"
port = 4533
user = ""
# Prefer SKSONIC_PASSWORD in ~/.config/sksonic/.env over storing it here
password = ""
api_version = "1.16.1"
client = "sksonic"
timeout = 30.0

[player]
# Player executable and flags; the stream URL is appended as the last argument
executable = "ffplay"
flags = "-nodisp -autoexit -loglevel quiet"
# Upper bound on how long starting a song blocks the UI; a later start is
# still picked up by the main loop
spawn_timeout = 0.2

[ui]
input_timeout = 0.5
bottom_space = 4
use_colors = true

[ui.indicators]
playing = ">"
repeat = "R"
shuffle = "X"
played = "#"
unplayed = "-"

[keys]
# Override or add bindings: key = "action"
# "w" = "playlist_view"

[chords]
# Second stroke after the chord prefix key
# "g" = "top"

[notifications]
# command = "notify-send"

[state_dump]
# path = "~/.cache/sksonic/state.json"

[logging]
level = "INFO"
max_file_size_mb = 10
backup_count = 5
"""


def _optional_path(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return str(Path(value).expanduser())


def _parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, validating as it goes."""
    config = Config()

    if "server" in toml_data:
        server_data = toml_data["server"]
        config.server = ServerConfig(
            url=server_data.get("url", config.server.url).rstrip("/"),
            port=server_data.get("port", config.server.port),
            user=server_data.get("user", config.server.user),
            password=server_data.get("password", config.server.password),
            api_version=server_data.get("api_version", config.server.api_version),
            client=server_data.get("client", config.server.client),
            timeout=float(server_data.get("timeout", config.server.timeout)),
        )
        if config.server.timeout <= 0:
            raise ConfigError("[server] timeout must be positive")

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            executable=player_data.get("executable", config.player.executable),
            flags=player_data.get("flags", config.player.flags),
            spawn_timeout=float(
                player_data.get("spawn_timeout", config.player.spawn_timeout)
            ),
        )
        if not config.player.executable:
            raise ConfigError("[player] executable must not be empty")
        if config.player.spawn_timeout < 0:
            raise ConfigError("[player] spawn_timeout must not be negative")

    if "ui" in toml_data:
        ui_data = toml_data["ui"]
        indicator_data = ui_data.get("indicators", {})
        defaults = IndicatorConfig()
        config.ui = UIConfig(
            input_timeout=float(
                ui_data.get("input_timeout", config.ui.input_timeout)
            ),
            bottom_space=int(ui_data.get("bottom_space", config.ui.bottom_space)),
            use_colors=ui_data.get("use_colors", config.ui.use_colors),
            indicators=IndicatorConfig(
                playing=indicator_data.get("playing", defaults.playing),
                repeat=indicator_data.get("repeat", defaults.repeat),
                shuffle=indicator_data.get("shuffle", defaults.shuffle),
                played=indicator_data.get("played", defaults.played),
                unplayed=indicator_data.get("unplayed", defaults.unplayed),
            ),
        )
        if config.ui.input_timeout <= 0:
            raise ConfigError("[ui] input_timeout must be positive")
        if config.ui.bottom_space < 3:
            raise ConfigError("[ui] bottom_space must be at least 3")

    # Action names are validated when the keymap is built
    config.keys = {str(k): str(v) for k, v in toml_data.get("keys", {}).items()}
    config.chords = {str(k): str(v) for k, v in toml_data.get("chords", {}).items()}

    if "notifications" in toml_data:
        config.notifications = NotificationsConfig(
            command=toml_data["notifications"].get("command") or None
        )

    if "state_dump" in toml_data:
        config.state_dump = StateDumpConfig(
            path=_optional_path(toml_data["state_dump"].get("path"))
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=_optional_path(logging_data.get("log_file")),
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
        )

    return config


def _apply_environment(config: Config) -> Config:
    """Environment variables override TOML values for the server section."""
    url = os.environ.get("SKSONIC_URL")
    user = os.environ.get("SKSONIC_USER")
    password = os.environ.get("SKSONIC_PASSWORD")

    if url:
        config.server.url = url.rstrip("/")
    if user:
        config.server.user = user
    if password:
        config.server.password = password
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - SKSONIC_URL
    - SKSONIC_USER
    - SKSONIC_PASSWORD

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        # Create config directory and default file
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return _apply_environment(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Error loading configuration from {config_path}: {e}") from e

    try:
        config = _parse_config(toml_data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    return _apply_environment(config)
