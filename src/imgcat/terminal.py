import os
import sys

DEFAULT_WIDTH = 80


def get_terminal_width(default: int = DEFAULT_WIDTH) -> int:
    """Return the column count of the terminal on stdout, or ``default`` if not a tty."""
    if not sys.stdout.isatty():
        return default
    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError):
        return default
    return columns if columns > 0 else default
