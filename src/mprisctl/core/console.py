"""Centralized Rich Console management.

One console for regular output on stdout and one for diagnostics on stderr.
"""

from rich.console import Console

_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get or create the global stdout Console.

    Highlighting and markup are off so property values are printed verbatim.
    """
    global _console
    if _console is None:
        _console = Console(highlight=False, markup=False, soft_wrap=True)
    return _console


def get_error_console() -> Console:
    """Get or create the global stderr Console."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True, highlight=False, markup=False, soft_wrap=True)
    return _error_console


def safe_print(message: str, style: str | None = None) -> None:
    """Print using Rich Console with optional styling.

    Args:
        message: The message to print
        style: Optional Rich style string (e.g., "bold red", "green")
    """
    console = get_console()
    if style:
        console.print(message, style=style)
    else:
        console.print(message)
