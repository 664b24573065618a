"""
Key bindings.

A KeyMap is built once at startup from the default table plus the [keys] and
[chords] config overrides, then handed to the dispatcher. Keys are identified
by token: the blessed key name for special keys (``KEY_UP``, ``KEY_ENTER``)
or the literal character otherwise.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from blessed.keyboard import Keystroke

from sksonic.core.config import ConfigError

from .actions import Action

DEFAULT_KEYS: Mapping[str, Action] = MappingProxyType(
    {
        "p": Action.PLAY_PAUSE,
        "s": Action.STOP,
        ">": Action.NEXT,
        "<": Action.PREVIOUS,
        "r": Action.REPEAT,
        "x": Action.SHUFFLE,
        "q": Action.QUIT,
        " ": Action.ADD,
        "KEY_ENTER": Action.ADD_AND_PLAY,
        "d": Action.REMOVE_ONE,
        "c": Action.REMOVE_ALL,
        "1": Action.MAIN_VIEW,
        "2": Action.PLAYLIST_VIEW,
        "KEY_UP": Action.UP,
        "KEY_DOWN": Action.DOWN,
        "KEY_LEFT": Action.LEFT,
        "KEY_RIGHT": Action.RIGHT,
        "k": Action.UP,
        "j": Action.DOWN,
        "h": Action.LEFT,
        "l": Action.RIGHT,
        "G": Action.BOTTOM,
        "g": Action.CHORD,
        "\x0c": Action.RESIZE,  # Ctrl+L
        "/": Action.SEARCH,
        "n": Action.SEARCH_NEXT,
        "N": Action.SEARCH_PREVIOUS,
    }
)

# Second stroke after the chord prefix
DEFAULT_CHORDS: Mapping[str, Action] = MappingProxyType({"g": Action.TOP})


def key_token(key: Keystroke) -> Optional[str]:
    """
    Normalise a blessed keystroke into a key token.

    Args:
        key: blessed Keystroke (empty on inkey() timeout)

    Returns:
        Key name for special keys, the character otherwise, None for no key
    """
    if not key:
        return None
    if key.is_sequence and key.name:
        return key.name
    if key in ("\n", "\r"):
        return "KEY_ENTER"
    if key == "\x1b":
        return "KEY_ESCAPE"
    if key in ("\x7f", "\x08"):
        return "KEY_BACKSPACE"
    return str(key)


def _parse_action(name: str, section: str, key: str) -> Action:
    try:
        return Action(name.strip().lower())
    except ValueError:
        raise ConfigError(f"[{section}] '{key}': unknown action '{name}'") from None


@dataclass(frozen=True)
class KeyMap:
    """Immutable key token -> Action tables."""

    bindings: Mapping[str, Action] = field(default_factory=lambda: dict(DEFAULT_KEYS))
    chords: Mapping[str, Action] = field(default_factory=lambda: dict(DEFAULT_CHORDS))

    @classmethod
    def from_config(
        cls,
        keys: Optional[Mapping[str, str]] = None,
        chords: Optional[Mapping[str, str]] = None,
    ) -> "KeyMap":
        """Defaults overlaid with config overrides.

        Raises:
            ConfigError: If an override names an unknown action
        """
        bindings = dict(DEFAULT_KEYS)
        for key, name in (keys or {}).items():
            bindings[key] = _parse_action(name, "keys", key)

        chord_table = dict(DEFAULT_CHORDS)
        for key, name in (chords or {}).items():
            chord_table[key] = _parse_action(name, "chords", key)

        return cls(
            bindings=MappingProxyType(bindings),
            chords=MappingProxyType(chord_table),
        )

    def resolve(self, token: Optional[str]) -> Optional[Action]:
        if token is None:
            return None
        return self.bindings.get(token)

    def resolve_chord(self, token: Optional[str]) -> Optional[Action]:
        if token is None:
            return None
        return self.chords.get(token)
