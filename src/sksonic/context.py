"""Application context for explicit state passing.

AppContext holds every long-lived object of a session and is passed
explicitly to the UI loop and the renderers instead of living in module
globals.
"""

from dataclasses import dataclass
from functools import partial
from typing import Optional

from rich.console import Console

from sksonic.core.config import Config
from sksonic.domain.catalog import CatalogCache, SubsonicClient
from sksonic.domain.playback import (
    NowPlaying,
    PlaybackController,
    PlayerBackend,
    SignalPlayerBackend,
    notify_now_playing,
    write_state_dump,
)
from sksonic.domain.playlist import Playlist
from sksonic.navigation import KeyMap, NavigationDispatcher


@dataclass
class AppContext:
    """Wiring of one sksonic session.

    Attributes:
        config: Application configuration
        client: Subsonic API client
        catalog: Lazy-loading catalog cache
        playlist: Playback queue
        player: Playback controller driving the external player
        keymap: Key bindings built once at startup
        dispatcher: Input dispatcher owning the view state
        console: Rich Console for output outside the full-screen UI
    """

    config: Config
    client: SubsonicClient
    catalog: CatalogCache
    playlist: Playlist
    player: PlaybackController
    keymap: KeyMap
    dispatcher: NavigationDispatcher
    console: Optional[Console] = None

    @classmethod
    def create(
        cls,
        config: Config,
        console: Optional[Console] = None,
        client: Optional[SubsonicClient] = None,
        backend: Optional[PlayerBackend] = None,
    ) -> "AppContext":
        """Build a session from the configuration.

        Nothing is fetched here; call CatalogCache.load_artists() and
        NavigationDispatcher.initialize() before running the UI.

        Raises:
            ConfigError: If a key binding names an unknown action
        """
        client = client or SubsonicClient(config.server)
        backend = backend or SignalPlayerBackend(
            config.player.executable, config.player.flags
        )
        catalog = CatalogCache(client)
        playlist = Playlist()
        player = PlaybackController(
            playlist,
            catalog,
            client,
            backend,
            spawn_timeout=config.player.spawn_timeout,
            on_track_change=_track_change_observer(config),
            on_transition=_transition_observer(config),
        )
        keymap = KeyMap.from_config(config.keys, config.chords)
        dispatcher = NavigationDispatcher(catalog, playlist, player, keymap)

        return cls(
            config=config,
            client=client,
            catalog=catalog,
            playlist=playlist,
            player=player,
            keymap=keymap,
            dispatcher=dispatcher,
            console=console,
        )


def _track_change_observer(config: Config):
    if not config.notifications.command:
        return None
    return partial(notify_now_playing, config.notifications.command)


def _transition_observer(config: Config):
    if not config.state_dump.path:
        return None
    path = config.state_dump.path

    def dump(snapshot: NowPlaying) -> None:
        write_state_dump(path, snapshot)

    return dump
