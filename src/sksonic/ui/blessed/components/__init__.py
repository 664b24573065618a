"""Blessed UI rendering components."""

from .layout import calculate_layout
from .panels import render_catalog, render_playlist
from .playback import now_playing_line, progress_line, render_playback

__all__ = [
    "calculate_layout",
    "render_catalog",
    "render_playlist",
    "now_playing_line",
    "progress_line",
    "render_playback",
]
