"""Playlist domain - the playback queue."""

from .playlist import INITIAL_CAPACITY, MIN_CAPACITY, Playlist, ShuffleRepeatMode

__all__ = [
    "INITIAL_CAPACITY",
    "MIN_CAPACITY",
    "Playlist",
    "ShuffleRepeatMode",
]
