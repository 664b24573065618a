"""sksonic - terminal client for Subsonic-compatible music servers."""

__version__ = "0.1.0"
