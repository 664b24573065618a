"""Playback exceptions."""


class PlaybackError(Exception):
    """Base exception for playback control errors."""

    pass


class InvalidIndexError(PlaybackError):
    """Raised when play() is asked for an index outside the playlist."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Playlist index {index} out of range (size {size})")
