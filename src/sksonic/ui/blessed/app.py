"""
Full-screen blessed interface.

Single-threaded loop: tick the player, surface queued status messages,
render, then block on input for at most ``ui.input_timeout`` seconds so
playback timing advances even without key presses.
"""

import sys
from dataclasses import replace

from blessed import Terminal
from loguru import logger

from sksonic.context import AppContext
from sksonic.core.output import drain_status_messages, set_ui_mode
from sksonic.navigation import View, key_token
from sksonic.navigation.view import set_status

from .components import calculate_layout, render_catalog, render_playback, render_playlist


def run_interface(ctx: AppContext) -> AppContext:
    """
    Run the interactive UI until the user quits.

    Errors raised inside the loop (fatal catalog errors) propagate after the
    terminal has been restored.

    Args:
        ctx: Application context with the catalog already loaded

    Returns:
        The same context after the UI session ends
    """
    term = Terminal()

    set_ui_mode(True)
    try:
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            try:
                main_loop(term, ctx)
            except KeyboardInterrupt:
                logger.info("Ctrl+C detected - quitting")
    finally:
        set_ui_mode(False)

    return ctx


def render(
    term: Terminal, ctx: AppContext, scroll: dict[str, int], status_color: str
) -> dict[str, int]:
    """Draw one frame and return the updated scroll offsets."""
    state = ctx.dispatcher.state
    layout = calculate_layout(term, state.current_view, ctx.config.ui.bottom_space)

    if state.current_view is View.INFO:
        scroll = render_catalog(term, ctx, layout, scroll)
    else:
        scroll = render_playlist(term, ctx, layout, scroll)

    render_playback(term, ctx, layout, status_color)
    sys.stdout.flush()
    return scroll


def main_loop(term: Terminal, ctx: AppContext) -> None:
    """
    Main event loop.

    Args:
        term: blessed Terminal instance
        ctx: Application context
    """
    dispatcher = ctx.dispatcher
    scroll: dict[str, int] = {}
    status_color = "white"
    last_size = (term.width, term.height)

    while not dispatcher.quit_requested:
        ctx.player.tick()

        for message, color in drain_status_messages():
            dispatcher.state = set_status(dispatcher.state, message)
            status_color = color

        size = (term.width, term.height)
        if size != last_size:
            last_size = size
            dispatcher.state = replace(dispatcher.state, redraw=True)

        if dispatcher.state.redraw:
            sys.stdout.write(term.home + term.clear)
            dispatcher.state = replace(dispatcher.state, redraw=False)

        scroll = render(term, ctx, scroll, status_color)

        token = key_token(term.inkey(timeout=ctx.config.ui.input_timeout))
        if token is None:
            continue

        # A key press dismisses the previous status message
        dispatcher.state = set_status(dispatcher.state, None)
        dispatcher.feed(token)

    logger.info("Quit requested")
