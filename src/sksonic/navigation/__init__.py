"""Navigation - key bindings, view state, search and action dispatch."""

from .actions import MOVEMENT_ACTIONS, Action
from .dispatcher import DispatchMode, NavigationDispatcher
from .keymap import DEFAULT_CHORDS, DEFAULT_KEYS, KeyMap, key_token
from .search import SearchDirection, SearchEngine
from .view import Panel, View, ViewState, clamp_index

__all__ = [
    "Action",
    "MOVEMENT_ACTIONS",
    "DispatchMode",
    "NavigationDispatcher",
    "DEFAULT_CHORDS",
    "DEFAULT_KEYS",
    "KeyMap",
    "key_token",
    "SearchDirection",
    "SearchEngine",
    "Panel",
    "View",
    "ViewState",
    "clamp_index",
]
