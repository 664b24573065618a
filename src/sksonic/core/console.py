"""Centralized Rich Console management.

Used for output that happens outside the full-screen UI: startup messages,
``--ping`` results and fatal errors printed after the terminal is restored.
"""

from rich.console import Console

_console: Console | None = None
_error_console: Console | None = None


def get_console(stderr: bool = False) -> Console:
    """Get or create the shared Rich Console (stdout or stderr)."""
    global _console, _error_console
    if stderr:
        if _error_console is None:
            _error_console = Console(stderr=True)
        return _error_console
    if _console is None:
        _console = Console()
    return _console


def safe_print(message: str, style: str | None = None, stderr: bool = False) -> None:
    """Print using Rich Console with optional styling.

    Markup is disabled so server-provided names containing brackets print as-is.

    Args:
        message: The message to print
        style: Optional Rich style string (e.g., "bold red", "green")
        stderr: Print to standard error instead of standard output
    """
    console = get_console(stderr=stderr)
    console.print(message, style=style, markup=False, highlight=False)
