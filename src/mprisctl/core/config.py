"""
Configuration management for mprisctl
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class PlayerConfig:
    """Configuration for player selection and control."""

    default_player: str = ""  # Bus name to prefer when nothing is remembered
    volume_step: float = 0.05  # Used by set-volume "+"/"-" without a number


@dataclass
class StateConfig:
    """Configuration for remembering the last selected player."""

    remember_player: bool = True
    last_player_file: Optional[str] = None  # Default: $XDG_STATE_HOME/mprisctl/active_player


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    enabled: bool = True
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: $XDG_STATE_HOME/mprisctl/mprisctl.log


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerConfig = field(default_factory=PlayerConfig)
    state: StateConfig = field(default_factory=StateConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "mprisctl"
    return Path.home() / ".config" / "mprisctl"


def get_config_path() -> Path:
    """Get the main configuration file path."""
    return get_config_dir() / "config.toml"


def get_state_dir() -> Path:
    """Get the state directory path (last player, log file)."""
    state_home = os.environ.get("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / "mprisctl"
    return Path.home() / ".local" / "state" / "mprisctl"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# mprisctl Configuration

[player]
# Player to select when none was remembered (e.g. "org.mpris.MediaPlayer2.mpv")
# default_player = ""

# Volume change for "set-volume +" / "set-volume -"
volume_step = 0.05

[state]
# Remember the selected player between invocations
remember_player = true

# Custom file for the remembered player
# last_player_file = "~/.local/state/mprisctl/active_player"

[logging]
# Write a log file
enabled = true

# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/state/mprisctl/mprisctl.log)
# log_file = "/path/to/mprisctl.log"
""".strip()


def _expand(path: Optional[str]) -> Optional[str]:
    return str(Path(path).expanduser()) if path else None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - MPRISCTL_PLAYER
    - MPRISCTL_LOG_LEVEL
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()
    config = Config()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
            config = _parse_config(toml_data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Error loading configuration from {config_path}: {e}")
            config = Config()

    player_override = os.environ.get("MPRISCTL_PLAYER")
    if player_override:
        config.player.default_player = player_override

    level_override = os.environ.get("MPRISCTL_LOG_LEVEL")
    if level_override:
        config.logging.level = level_override.upper()

    return config


def _parse_config(toml_data: dict) -> Config:
    config = Config()

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            default_player=str(
                player_data.get("default_player", config.player.default_player)
            ),
            volume_step=float(player_data.get("volume_step", config.player.volume_step)),
        )

    if "state" in toml_data:
        state_data = toml_data["state"]
        config.state = StateConfig(
            remember_player=bool(
                state_data.get("remember_player", config.state.remember_player)
            ),
            last_player_file=_expand(state_data.get("last_player_file")),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            enabled=bool(logging_data.get("enabled", config.logging.enabled)),
            level=str(logging_data.get("level", config.logging.level)).upper(),
            log_file=_expand(logging_data.get("log_file")),
        )

    return config


def write_default_config(config_path: Optional[Path] = None) -> bool:
    """Write the default configuration file unless one already exists.

    Returns:
        True if a file was written
    """
    config_path = config_path or get_config_path()
    if config_path.exists():
        return False
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(create_default_config() + "\n")
    return True
