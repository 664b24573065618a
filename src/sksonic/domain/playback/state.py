"""
Playback state types shared by the controller, the player backend and the
side channels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class PlaybackStatus(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class PlayerEventKind(Enum):
    """What the spawn thread observed about a player process."""

    STARTED = "started"  # Process is running, pid is set
    FAILED = "failed"  # Process could not be started, error is set
    EXITED = "exited"  # Process finished, returncode is set


@dataclass(frozen=True)
class PlayerEvent:
    """Message sent from a spawn thread to the main loop.

    Every event carries the generation of the play() call that spawned the
    process, so the controller can drop events about players it has already
    replaced or stopped.
    """

    kind: PlayerEventKind
    generation: int
    pid: Optional[int] = None
    returncode: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class NowPlaying:
    """Snapshot of the playback state handed to observers."""

    status: PlaybackStatus
    artist: str = ""
    album: str = ""
    song: str = ""
    length: int = 0  # seconds
    playtime: int = 0  # seconds
    time: int = 0  # unix timestamp of the snapshot

    @property
    def title_line(self) -> str:
        """'artist - album - song' as shown in the UI and notifications."""
        return f"{self.artist} - {self.album} - {self.song}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "artist": self.artist,
            "album": self.album,
            "song": self.song,
            "length": self.length,
            "playtime": self.playtime,
            "time": self.time,
        }
