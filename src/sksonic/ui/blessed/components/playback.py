"""Playback area: now-playing line, progress bar and prompt/status line."""

from typing import Optional

from blessed import Terminal

from sksonic.context import AppContext
from sksonic.domain.playback import PlaybackStatus
from sksonic.domain.playlist import ShuffleRepeatMode

from ..helpers import write_at
from ..styles.formatting import create_progress_bar, format_time


def now_playing_line(ctx: AppContext) -> str:
    """'> artist - album - song [R]' or 'Stopped'."""
    indicators = ctx.config.ui.indicators
    snapshot = ctx.player.snapshot()

    mode = ""
    if ctx.playlist.mode is ShuffleRepeatMode.REPEAT:
        mode = f" [{indicators.repeat}]"
    elif ctx.playlist.mode is ShuffleRepeatMode.SHUFFLE:
        mode = f" [{indicators.shuffle}]"

    if snapshot.status is PlaybackStatus.STOPPED:
        return f"Stopped{mode}"
    prefix = indicators.playing if snapshot.status is PlaybackStatus.PLAYING else "||"
    return f"{prefix} {snapshot.title_line}{mode}"


def progress_line(ctx: AppContext, width: int) -> str:
    indicators = ctx.config.ui.indicators
    snapshot = ctx.player.snapshot()
    elapsed = format_time(snapshot.playtime)
    total = format_time(snapshot.length)
    bar_width = max(width - len(elapsed) - len(total) - 4, 0)
    bar = create_progress_bar(
        snapshot.playtime,
        snapshot.length,
        bar_width,
        played=indicators.played,
        unplayed=indicators.unplayed,
    )
    return f"{elapsed} [{bar}] {total}"


def render_playback(
    term: Terminal,
    ctx: AppContext,
    layout: dict[str, int],
    status_color: Optional[str] = None,
) -> None:
    """Render the bottom area; an extra leading row becomes a separator."""
    state = ctx.dispatcher.state
    width = layout["width"]
    y = layout["playback_y"]

    if layout["playback_height"] > 3:
        write_at(term, 0, y, "─" * width)
        y += 1

    write_at(term, 0, y, term.bold(now_playing_line(ctx)))
    write_at(term, 0, y + 1, progress_line(ctx, width))

    if state.search_prompt is not None:
        write_at(term, 0, y + 2, f"/{state.search_prompt}")
    elif state.status_message:
        color = status_color if ctx.config.ui.use_colors and status_color else None
        style = getattr(term, color) if color else str
        write_at(term, 0, y + 2, style(state.status_message))
    else:
        write_at(term, 0, y + 2, "")
