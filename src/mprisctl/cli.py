"""
mprisctl CLI - entry point and command dispatch

Parses one command per invocation, selects a player (remembered from the
previous run unless told otherwise), runs the command and remembers the
selected player for next time.
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from mprisctl import __version__
from mprisctl.bus.constants import LOOP_STATUSES, NO_TRACK
from mprisctl.core.config import (
    Config,
    get_config_path,
    get_state_dir,
    load_config,
    write_default_config,
)
from mprisctl.core.console import get_error_console, safe_print
from mprisctl.core.output import log, setup_loguru
from mprisctl.core.state import get_last_player_path, read_last_player, write_last_player
from mprisctl.domain.exceptions import MprisError
from mprisctl.domain.metadata import format_metadata
from mprisctl.domain.root import Mpris


class VolumeChange:
    """Parsed set-volume argument: absolute value or relative step."""

    def __init__(self, value: Optional[float], mode: str = "set"):
        self.value = value  # None means "use the configured step"
        self.mode = mode  # 'set' | 'increment' | 'decrement'

    def __repr__(self) -> str:
        return f"VolumeChange(value={self.value!r}, mode={self.mode!r})"


def parse_volume(text: str) -> VolumeChange:
    """Parse "0.5", "0.1+", "0.1-", "+" or "-".

    Raises:
        argparse.ArgumentTypeError: If the number is not valid
    """
    mode = "set"
    if text.endswith("+"):
        mode, text = "increment", text[:-1]
    elif text.endswith("-"):
        mode, text = "decrement", text[:-1]

    if not text and mode != "set":
        return VolumeChange(None, mode)

    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not a valid volume")
    return VolumeChange(value, mode)


def parse_bool(text: str) -> bool:
    if text.lower() in ("true", "on", "yes", "1"):
        return True
    if text.lower() in ("false", "off", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"'{text}' is not true or false")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="mprisctl",
        description="Control MPRIS media players",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument("--version", action="version", version=f"mprisctl {__version__}")
    parser.add_argument(
        "--verbose", action="store_true", help="Print debug logging to stderr"
    )
    parser.add_argument(
        "--player", metavar="NAME", help="Bus name of the player to control"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # Player selection
    subparsers.add_parser("next-player", help="Switch to next player")
    subparsers.add_parser("previous-player", help="Switch to previous player")
    set_player = subparsers.add_parser("set-player", help="Set player to control")
    set_player.add_argument("name", help="Bus name of the player")
    subparsers.add_parser("raise", help="Raise current player")
    subparsers.add_parser("quit", help="Quit current player")
    fullscreen = subparsers.add_parser("set-fullscreen", help="Set fullscreen state")
    fullscreen.add_argument("enabled", type=parse_bool, help="true or false")

    # Playback
    subparsers.add_parser("next", help="Skip to next track")
    subparsers.add_parser("previous", help="Skip to previous track")
    subparsers.add_parser("play", help="Start playback")
    subparsers.add_parser("pause", help="Pause playback")
    subparsers.add_parser("play-pause", help="Toggle between play and pause")
    subparsers.add_parser("stop", help="Stop playback")
    seek = subparsers.add_parser("seek", help="Seek forward or backward")
    seek.add_argument("offset", type=int, help="Offset in microseconds")
    position = subparsers.add_parser("set-position", help="Set playback position")
    position.add_argument("position", type=int, help="Position in microseconds")
    volume = subparsers.add_parser(
        "set-volume",
        help="Set playback volume",
        description="VOLUME is 0-1, with an optional '+' or '-' suffix to "
        "increment or decrement (alone, '+' and '-' use the configured step)",
    )
    volume.add_argument("volume", type=parse_volume, help="e.g. 0.5, 0.1+, 0.1-")
    rate = subparsers.add_parser("set-rate", help="Set playback rate")
    rate.add_argument("rate", type=float, help="Between MinimumRate and MaximumRate")
    shuffle = subparsers.add_parser("set-shuffle", help="Set shuffle")
    shuffle.add_argument("enabled", type=parse_bool, help="true or false")
    loop = subparsers.add_parser("set-loop", help="Set loop status")
    loop.add_argument("status", choices=LOOP_STATUSES)
    open_uri = subparsers.add_parser("open", help="Open and play media")
    open_uri.add_argument("uri", help="URI to open")

    # Information
    subparsers.add_parser("player", help="Display current player")
    subparsers.add_parser("players", help="Display all players")
    metadata = subparsers.add_parser("metadata", help="Display metadata of current track")
    metadata.add_argument("field", nargs="?", help="e.g. xesam:title")
    properties = subparsers.add_parser("properties", help="Display MPRIS properties")
    properties.add_argument("field", nargs="?", help="e.g. Identity")
    player_properties = subparsers.add_parser(
        "player-properties", help="Display properties of current player"
    )
    player_properties.add_argument("field", nargs="?", help="e.g. Volume")

    # Track list
    add_track = subparsers.add_parser("add-track", help="Add track to tracklist")
    add_track.add_argument("uri", help="URI of the track")
    add_track.add_argument(
        "--after", metavar="ID", default=NO_TRACK, help="Insert after this track id"
    )
    add_track.add_argument(
        "--set-current", action="store_true", help="Make the new track current"
    )
    remove_track = subparsers.add_parser("remove-track", help="Remove track from tracklist")
    remove_track.add_argument("track_id", metavar="ID")
    go_to = subparsers.add_parser("go-to-track", help="Go to track in tracklist")
    go_to.add_argument("track_id", metavar="ID")
    tracks_metadata = subparsers.add_parser(
        "tracks-metadata", help="Display metadata of tracks in tracklist"
    )
    tracks_metadata.add_argument("track_ids", metavar="ID", nargs="+")
    tracklist_properties = subparsers.add_parser(
        "tracklist-properties", help="Display tracklist properties of current player"
    )
    tracklist_properties.add_argument("field", nargs="?", help="e.g. Tracks")

    # Misc
    subparsers.add_parser("init-config", help="Write a default configuration file")

    return parser


def print_lines(lines: Iterable[str]) -> None:
    for line in lines:
        safe_print(line)


def open_mpris(player_name: str) -> Mpris:
    """Connect to the session bus and select a player."""
    from mprisctl.bus.channel import BusChannel

    return Mpris(BusChannel.session(), player_name)


def select_player_name(args: argparse.Namespace, config: Config, state_path: Path) -> str:
    """Pick the player to start from: --player, remembered, then configured."""
    if args.player:
        return args.player
    if config.state.remember_player:
        remembered = read_last_player(state_path)
        if remembered:
            return remembered
    return config.player.default_player


def change_volume(mpris: Mpris, change: VolumeChange, config: Config) -> None:
    player = mpris.player
    step = change.value if change.value is not None else config.player.volume_step
    if change.mode == "increment":
        player.adjust_volume(step)
    elif change.mode == "decrement":
        player.adjust_volume(-step)
    else:
        player.set_volume(step)


def dispatch(mpris: Mpris, args: argparse.Namespace, config: Config) -> None:
    """Run one parsed command against the selected player."""
    player = mpris.player

    match args.command:
        # Player selection
        case "next-player":
            mpris.next()
        case "previous-player":
            mpris.previous()
        case "set-player":
            if not mpris.set_player(args.name):
                log(f"Player {args.name} not found", level="warning")
        case "raise":
            mpris.raise_()
        case "quit":
            mpris.quit()
        case "set-fullscreen":
            mpris.set_fullscreen(args.enabled)

        # Playback
        case "next":
            player.next()
        case "previous":
            player.previous()
        case "play":
            player.play()
        case "pause":
            player.pause()
        case "play-pause":
            player.play_pause()
        case "stop":
            player.stop()
        case "seek":
            player.seek(args.offset)
        case "set-position":
            player.set_position(args.position)
        case "set-volume":
            change_volume(mpris, args.volume, config)
        case "set-rate":
            player.set_rate(args.rate)
        case "set-shuffle":
            player.set_shuffle(args.enabled)
        case "set-loop":
            player.set_loop_status(args.status)
        case "open":
            player.open_uri(args.uri)

        # Information
        case "player":
            print_lines([player.name])
        case "players":
            print_lines(mpris.players)
        case "metadata":
            print_lines(format_metadata(player.get_metadata(), args.field))
        case "properties":
            print_lines(mpris.format_properties(args.field))
        case "player-properties":
            print_lines(player.format_properties(args.field))

        # Track list
        case _ if mpris.track_list is None:
            logger.debug(f"Skipping {args.command}: {player.name} has no track list")
        case "add-track":
            mpris.track_list.add_track(args.uri, args.after, args.set_current)
        case "remove-track":
            mpris.track_list.remove_track(args.track_id)
        case "go-to-track":
            mpris.track_list.go_to(args.track_id)
        case "tracks-metadata":
            for index, metadata in enumerate(mpris.track_list.get_metadata(args.track_ids)):
                if index:
                    print_lines([""])
                print_lines(format_metadata(metadata))
        case "tracklist-properties":
            print_lines(mpris.track_list.format_properties(args.field))


def run(argv: Optional[list[str]] = None) -> int:
    """Run mprisctl with the given arguments.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = load_config()
    log_file = None
    if config.logging.enabled:
        log_file = Path(config.logging.log_file or get_state_dir() / "mprisctl.log")
    setup_loguru(log_file, level=config.logging.level, verbose=args.verbose)

    if args.command == "init-config":
        if write_default_config():
            log(f"Created default configuration at: {get_config_path()}")
        else:
            log(f"Configuration already exists at: {get_config_path()}", level="warning")
        return 0

    state_path = get_last_player_path(config)

    try:
        with open_mpris(select_player_name(args, config, state_path)) as mpris:
            dispatch(mpris, args, config)
            if config.state.remember_player:
                write_last_player(state_path, mpris.current_name)
    except (MprisError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        get_error_console().print(f"mprisctl: {e}", style="red")
        return 1

    return 0


def main() -> None:
    """Main entry point for the mprisctl command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
