"""Playback domain - external player control and state management.

This domain handles:
- Spawning the external player and signalling it (pause, resume, stop)
- Player state machine (playing, paused, stopped) and elapsed time
- Shuffle/repeat-aware advancing through the playlist
- Now-playing side channels (notification command, state dump)
"""

from .controller import PlaybackController
from .exceptions import InvalidIndexError, PlaybackError
from .process import PlayerBackend, SignalPlayerBackend
from .side_channels import notify_now_playing, write_state_dump
from .state import NowPlaying, PlaybackStatus, PlayerEvent, PlayerEventKind

__all__ = [
    # Controller
    "PlaybackController",
    # Process control
    "PlayerBackend",
    "SignalPlayerBackend",
    # State
    "NowPlaying",
    "PlaybackStatus",
    "PlayerEvent",
    "PlayerEventKind",
    # Side channels
    "notify_now_playing",
    "write_state_dump",
    # Exceptions
    "PlaybackError",
    "InvalidIndexError",
]
