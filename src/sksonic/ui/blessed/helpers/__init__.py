"""Blessed UI helper functions."""

from .scrolling import calculate_scroll_offset
from .terminal import write_at

__all__ = ["calculate_scroll_offset", "write_at"]
