"""The closed set of user actions."""

from enum import Enum


class Action(Enum):
    PLAY_PAUSE = "play_pause"
    STOP = "stop"
    NEXT = "next"
    PREVIOUS = "previous"
    REPEAT = "repeat"
    SHUFFLE = "shuffle"
    QUIT = "quit"
    ADD = "add"
    ADD_AND_PLAY = "add_and_play"
    REMOVE_ONE = "remove_one"
    REMOVE_ALL = "remove_all"
    MAIN_VIEW = "main_view"
    PLAYLIST_VIEW = "playlist_view"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RESIZE = "resize"
    BOTTOM = "bottom"
    TOP = "top"
    CHORD = "chord"
    SEARCH = "search"
    SEARCH_NEXT = "search_next"
    SEARCH_PREVIOUS = "search_previous"


MOVEMENT_ACTIONS = frozenset(
    {Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT, Action.TOP, Action.BOTTOM}
)
