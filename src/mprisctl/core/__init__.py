"""Core infrastructure layer - no MPRIS logic.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and user output (Loguru)
- Console management (Rich)
- Last selected player persistence
"""

# Configuration
from .config import (
    Config,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_state_dir,
    load_config,
    write_default_config,
)

# Console
from .console import get_console, get_error_console, safe_print

# Output
from .output import log, setup_loguru

# State
from .state import get_last_player_path, read_last_player, write_last_player

__all__ = [
    # Config
    "Config",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_state_dir",
    "load_config",
    "write_default_config",
    # Console
    "get_console",
    "get_error_console",
    "safe_print",
    # Output
    "log",
    "setup_loguru",
    # State
    "get_last_player_path",
    "read_last_player",
    "write_last_player",
]
