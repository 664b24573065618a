"""View state - what the renderer shows. Immutable, updated with replace()."""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional


class View(Enum):
    INFO = "info"  # three catalog panels
    PLAYLIST = "playlist"


class Panel(IntEnum):
    ARTISTS = 0
    ALBUMS = 1
    SONGS = 2


@dataclass(frozen=True)
class ViewState:
    """Active view and panel plus one cursor per catalog level.

    A cursor is -1 when its panel has no items, otherwise it is in range.
    """

    current_view: View = View.INFO
    current_panel: Panel = Panel.ARTISTS
    artist_index: int = -1
    album_index: int = -1
    song_index: int = -1
    search_prompt: Optional[str] = None
    status_message: Optional[str] = None
    redraw: bool = True  # full clear before the next render


def clamp_index(index: int, length: int) -> int:
    """Clamp a cursor into [0, length) or return -1 for an empty list."""
    if length <= 0:
        return -1
    return max(0, min(index, length - 1))


def panel_index(state: ViewState, panel: Panel) -> int:
    if panel is Panel.ARTISTS:
        return state.artist_index
    if panel is Panel.ALBUMS:
        return state.album_index
    return state.song_index


def with_panel_index(state: ViewState, panel: Panel, index: int) -> ViewState:
    """Set a panel cursor; moving a parent cursor resets its children to 0."""
    if panel is Panel.ARTISTS:
        return replace(state, artist_index=index, album_index=0, song_index=0)
    if panel is Panel.ALBUMS:
        return replace(state, album_index=index, song_index=0)
    return replace(state, song_index=index)


def switch_view(state: ViewState, view: View) -> ViewState:
    if state.current_view is view:
        return state
    return replace(state, current_view=view, redraw=True)


def shift_panel(state: ViewState, delta: int) -> ViewState:
    """Move the active panel left/right, clamped to the panel set."""
    target = max(Panel.ARTISTS, min(state.current_panel + delta, Panel.SONGS))
    return replace(state, current_panel=Panel(target))


def set_status(state: ViewState, message: Optional[str]) -> ViewState:
    return replace(state, status_message=message)
