"""
Unified output system using Loguru.
Every user-facing message goes to the log file; while the full-screen UI runs
it is also queued for the status line instead of being printed.
"""

import threading
from pathlib import Path

from loguru import logger

from .console import safe_print

# Set while the blessed UI owns the terminal
_ui_mode_active = False
_ui_mode_lock = threading.Lock()

# Messages waiting to be shown on the status line, drained by the main loop
_pending_status_messages: list[tuple[str, str]] = []
_pending_messages_lock = threading.Lock()

_LEVEL_COLORS = {
    "debug": "cyan",
    "info": "white",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Configure loguru for file-only logging (the blessed UI owns the console).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Size at which the file is rotated
        backup_count: Number of rotated files to keep
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default stderr handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes; the spawn thread only logs rarely
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def set_ui_mode(active: bool) -> None:
    """Route log() output to the status line (True) or stdout (False)."""
    global _ui_mode_active
    with _ui_mode_lock:
        _ui_mode_active = active
    logger.debug(f"UI mode {'enabled' if active else 'disabled'}")


def drain_status_messages() -> list[tuple[str, str]]:
    """
    Get and clear all pending status messages.

    Returns:
        List of (message, color) tuples, oldest first
    """
    global _pending_status_messages
    with _pending_messages_lock:
        messages = _pending_status_messages[:]
        _pending_status_messages = []
        return messages


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND surfaces the message to the user.

    Args:
        message: User-facing message
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if level == "debug":
        return

    with _ui_mode_lock:
        ui_active = _ui_mode_active

    color = _LEVEL_COLORS.get(level, "white")
    if ui_active:
        with _pending_messages_lock:
            _pending_status_messages.append((message, color))
    else:
        safe_print(message, style=color)
