"""Terminal output utilities that prevent rendering artifacts."""

import sys

from blessed import Terminal


def write_at(
    term: Terminal, x: int, y: int, content: str, *, clear: bool = True
) -> None:
    """Write content at position, cut to the terminal width.

    Args:
        term: Blessed terminal instance
        x: Column position (0-indexed)
        y: Row position (0-indexed)
        content: Text to write (can include terminal formatting)
        clear: Clear to end of line first, so shorter content leaves no
               leftovers from the previous frame
    """
    if y < 0 or y >= term.height:
        return
    content = term.truncate(content, max(term.width - x, 0))
    if clear:
        sys.stdout.write(term.move_xy(x, y) + term.clear_eol + content)
    else:
        sys.stdout.write(term.move_xy(x, y) + content)
