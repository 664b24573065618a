"""Formatting helper functions."""


def format_time(seconds: float) -> str:
    """
    Format seconds as M:SS.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    seconds = max(seconds, 0)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def create_progress_bar(
    position: float,
    duration: float,
    width: int,
    played: str = "#",
    unplayed: str = "-",
) -> str:
    """Plain-text progress bar of exactly width cells.

    Unknown durations (0 or less) render as an empty bar.
    """
    if width <= 0:
        return ""
    if duration <= 0:
        return unplayed * width

    filled = int(width * min(max(position / duration, 0.0), 1.0))
    return played * filled + unplayed * (width - filled)
