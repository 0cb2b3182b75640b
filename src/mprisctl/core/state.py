"""
Last selected player persistence.

A single bus name stored in a plain file, so the next invocation controls
the same player. No locking: concurrent invocations simply race.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from .config import Config, get_state_dir


def get_last_player_path(config: Optional[Config] = None) -> Path:
    """Get the path of the remembered-player file."""
    if config and config.state.last_player_file:
        return Path(config.state.last_player_file)
    return get_state_dir() / "active_player"


def read_last_player(path: Path) -> str:
    """Read the remembered player name, empty if there is none."""
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return ""
    except OSError as e:
        logger.warning(f"Could not read last player from {path}: {e}")
        return ""


def write_last_player(path: Path, name: str) -> bool:
    """Remember name, writing only when it changed.

    Returns:
        True if the file was written
    """
    if read_last_player(path) == name:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(name, encoding="utf-8")
    logger.debug(f"Remembered player {name} in {path}")
    return True
