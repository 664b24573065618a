"""Pure helper for keeping a list cursor inside its viewport."""


def calculate_scroll_offset(
    selected: int,
    current_scroll: int,
    visible_items: int,
    total_items: int,
) -> int:
    """Return the first visible row so that selected stays on screen.

    The offset only moves when the cursor leaves the viewport, and never
    scrolls past the end of the list.

    Examples:
        >>> calculate_scroll_offset(15, 0, 10, 20)
        6
        >>> calculate_scroll_offset(2, 10, 10, 20)
        2
        >>> calculate_scroll_offset(5, 0, 10, 20)
        0
    """
    if visible_items <= 0 or total_items <= visible_items or selected < 0:
        return 0

    if selected >= current_scroll + visible_items:
        offset = selected - visible_items + 1
    elif selected < current_scroll:
        offset = selected
    else:
        offset = current_scroll

    return max(0, min(offset, total_items - visible_items))
