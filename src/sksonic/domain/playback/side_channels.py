"""Now-playing notification command and state dump file."""

import json
import shlex
import subprocess
from pathlib import Path

from loguru import logger

from .state import NowPlaying, PlaybackStatus


def notify_now_playing(command: str, snapshot: NowPlaying) -> None:
    """
    Run the configured notification command for a track change.

    Invoked as ``<command> "Now playing" "<artist> - <album> - <song>"``.
    The command is started without waiting for it to finish.

    Note:
        Errors are logged but don't interrupt program flow.
    """
    if snapshot.status is PlaybackStatus.STOPPED:
        return

    argv = [*shlex.split(command), "Now playing", snapshot.title_line]
    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        logger.warning(f"Notification command failed: {e}")


def write_state_dump(path: str, snapshot: NowPlaying) -> None:
    """Overwrite the state file with the snapshot, or a blank line when stopped."""
    if snapshot.status is PlaybackStatus.STOPPED:
        content = "\n"
    else:
        content = json.dumps(snapshot.to_dict()) + "\n"

    try:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not write state dump {path}: {e}")
