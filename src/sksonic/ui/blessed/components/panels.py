"""Catalog panels and playlist rendering."""

from blessed import Terminal

from sksonic.context import AppContext
from sksonic.domain.playback import PlaybackStatus
from sksonic.navigation import Panel

from ..helpers import calculate_scroll_offset, write_at
from ..styles.formatting import format_time

PANEL_TITLES = {
    Panel.ARTISTS: "Artists",
    Panel.ALBUMS: "Albums",
    Panel.SONGS: "Songs",
}


def _cell(term: Terminal, text: str, width: int, style=None) -> str:
    """Pad/cut text to exactly width cells, then apply the style."""
    text = term.ljust(term.truncate(text, max(width - 1, 0)), width)
    return style(text) if style else text


def render_catalog(
    term: Terminal, ctx: AppContext, layout: dict[str, int], scroll: dict[str, int]
) -> dict[str, int]:
    """
    Render the three catalog columns side by side.

    Rows are composed across all columns and written in one go, since
    write_at clears to the end of the line.

    Returns:
        Updated scroll offsets
    """
    dispatcher = ctx.dispatcher
    state = dispatcher.state
    width = layout["column_width"]
    height = layout["list_height"]
    use_colors = ctx.config.ui.use_colors

    columns = []
    for panel in Panel:
        names = dispatcher.panel_names(panel)
        selected = {
            Panel.ARTISTS: state.artist_index,
            Panel.ALBUMS: state.album_index,
            Panel.SONGS: state.song_index,
        }[panel]
        key = panel.name.lower()
        scroll[key] = calculate_scroll_offset(selected, scroll.get(key, 0), height, len(names))
        columns.append((panel, names, selected, scroll[key]))

    title_cells = []
    for panel, names, _, _ in columns:
        title = f"{PANEL_TITLES[panel]} ({len(names)})"
        active = panel is state.current_panel
        style = term.bold_underline if active else term.bold
        title_cells.append(_cell(term, title, width, style))
    write_at(term, 0, layout["content_y"], "".join(title_cells))

    for row in range(height):
        cells = []
        for panel, names, selected, offset in columns:
            index = offset + row
            if index >= len(names):
                cells.append(_cell(term, "", width))
                continue
            style = None
            if index == selected:
                if panel is state.current_panel:
                    style = term.reverse
                elif use_colors:
                    style = term.cyan
                else:
                    style = term.bold
            cells.append(_cell(term, f" {names[index]}", width, style))
        write_at(term, 0, layout["list_y"] + row, "".join(cells))

    return scroll


def render_playlist(
    term: Terminal, ctx: AppContext, layout: dict[str, int], scroll: dict[str, int]
) -> dict[str, int]:
    """Render the playlist as a single column with the playing entry marked."""
    playlist = ctx.playlist
    player = ctx.player
    indicators = ctx.config.ui.indicators
    width = layout["width"]
    height = layout["list_height"]

    scroll["playlist"] = calculate_scroll_offset(
        playlist.selected_index, scroll.get("playlist", 0), height, playlist.size
    )
    offset = scroll["playlist"]

    write_at(
        term,
        0,
        layout["content_y"],
        term.bold_underline(f"Playlist ({playlist.size})"),
    )

    playing = player.status is not PlaybackStatus.STOPPED
    marker_width = len(indicators.playing)
    for row in range(height):
        index = offset + row
        y = layout["list_y"] + row
        song_id = playlist.song_id_at(index)
        if song_id is None:
            write_at(term, 0, y, "")
            continue

        song = ctx.catalog.find_song(song_id)
        artist, _ = ctx.catalog.song_context(song_id)
        is_current = playing and index == playlist.current_index
        marker = indicators.playing if is_current else " " * marker_width
        name = song.name if song else song_id
        length = format_time(song.duration) if song else "?:??"
        line = f"{marker} {index + 1:>3}. {artist.name + ' - ' if artist else ''}{name} [{length}]"

        style = None
        if index == playlist.selected_index:
            style = term.reverse
        elif is_current and ctx.config.ui.use_colors:
            style = term.green
        write_at(term, 0, y, _cell(term, line, width, style))

    return scroll
