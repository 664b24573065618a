"""Layout calculation functions."""

from blessed import Terminal

from sksonic.navigation import Panel, View


def calculate_layout(term: Terminal, view: View, bottom_space: int) -> dict[str, int]:
    """
    Pure function: calculate positions for the content and playback areas.

    The content area holds three catalog columns (INFO view) or one playlist
    column, each with a title row. The bottom_space rows below it belong to
    the playback area.

    Args:
        term: blessed Terminal instance
        view: Active view
        bottom_space: Rows reserved for the playback area

    Returns:
        Dictionary with region positions and sizes
    """
    term_height = max(term.height, bottom_space + 2)
    term_width = max(term.width, 3)

    content_height = term_height - bottom_space
    columns = len(Panel) if view is View.INFO else 1

    return {
        "width": term_width,
        "content_y": 0,
        "content_height": content_height,
        "list_y": 1,  # below the column titles
        "list_height": content_height - 1,
        "columns": columns,
        "column_width": term_width // columns,
        "playback_y": content_height,
        "playback_height": bottom_space,
    }
