"""
Navigation dispatcher.

Turns key tokens into actions and applies them to the view state, the
playlist and the playback controller. Input handling is an explicit mode
machine:

    IDLE              ordinary key -> action dispatch
    AWAITING_CHORD    the prefix key was pressed, next key goes through the
                      chord table
    SEARCH_INPUT      keys edit the search query, Enter commits, Escape
                      cancels and restores the pre-search selection
    SEARCH_COMMITTED  search_next/search_previous cycle matches, any other
                      action ends the session and is dispatched normally

Every catalog fetch triggered by a key happens synchronously before feed()
returns, so the next render always matches the applied selection.
"""

from dataclasses import replace
from enum import Enum
from typing import List, Optional

from loguru import logger

from sksonic.domain.catalog import Album, Artist, CatalogCache, Song
from sksonic.domain.playback import PlaybackController
from sksonic.domain.playlist import Playlist

from .actions import MOVEMENT_ACTIONS, Action
from .keymap import KeyMap
from .search import SearchDirection, SearchEngine
from .view import (
    Panel,
    View,
    ViewState,
    clamp_index,
    panel_index,
    shift_panel,
    switch_view,
    with_panel_index,
)


class DispatchMode(Enum):
    IDLE = "idle"
    AWAITING_CHORD = "awaiting_chord"
    SEARCH_INPUT = "search_input"
    SEARCH_COMMITTED = "search_committed"


class NavigationDispatcher:
    """Owns the ViewState and routes actions to the domain objects."""

    def __init__(
        self,
        catalog: CatalogCache,
        playlist: Playlist,
        player: PlaybackController,
        keymap: KeyMap,
    ):
        self.catalog = catalog
        self.playlist = playlist
        self.player = player
        self.keymap = keymap
        self.search_engine = SearchEngine()

        self.state = ViewState()
        self.mode = DispatchMode.IDLE
        self.quit_requested = False
        self._pre_search: Optional[tuple[ViewState, int]] = None

    # Catalog views of the current selection

    @property
    def current_artist(self) -> Optional[Artist]:
        artists = self.catalog.artists
        if 0 <= self.state.artist_index < len(artists):
            return artists[self.state.artist_index]
        return None

    @property
    def current_album(self) -> Optional[Album]:
        albums = self.albums
        if 0 <= self.state.album_index < len(albums):
            return albums[self.state.album_index]
        return None

    @property
    def albums(self) -> List[Album]:
        artist = self.current_artist
        return artist.albums if artist else []

    @property
    def songs(self) -> List[Song]:
        album = self.current_album
        return album.songs if album else []

    def panel_names(self, panel: Panel) -> List[str]:
        if panel is Panel.ARTISTS:
            return [artist.name for artist in self.catalog.artists]
        if panel is Panel.ALBUMS:
            return [album.name for album in self.albums]
        return [song.name for song in self.songs]

    def playlist_names(self) -> List[str]:
        names = []
        for song_id in self.playlist.entries:
            song = self.catalog.find_song(song_id)
            names.append(song.name if song else song_id)
        return names

    def visible_names(self) -> List[str]:
        """Names the search runs over: the playlist or the active panel."""
        if self.state.current_view is View.PLAYLIST:
            return self.playlist_names()
        return self.panel_names(self.state.current_panel)

    def initialize(self) -> None:
        """Select the first artist and load what the panels need to show it."""
        self.state = replace(self.state, artist_index=0, album_index=0, song_index=0)
        self.ensure_selection()

    def ensure_selection(self) -> None:
        """Fetch the selected artist's albums and album's songs, fixing cursors."""
        artist_index = clamp_index(self.state.artist_index, len(self.catalog.artists))
        self.state = replace(self.state, artist_index=artist_index)

        artist = self.current_artist
        albums = self.catalog.ensure_albums(artist.id) if artist else []
        self.state = replace(
            self.state, album_index=clamp_index(self.state.album_index, len(albums))
        )

        album = self.current_album
        songs = self.catalog.ensure_songs(artist.id, album.id) if artist and album else []
        self.state = replace(
            self.state, song_index=clamp_index(self.state.song_index, len(songs))
        )

    # Input

    def feed(self, token: Optional[str]) -> None:
        """Process one key token."""
        if token is None:
            return

        if self.mode is DispatchMode.AWAITING_CHORD:
            self.mode = DispatchMode.IDLE
            action = self.keymap.resolve_chord(token)
            if action is not None and action is not Action.CHORD:
                self.handle(action)
            return

        if self.mode is DispatchMode.SEARCH_INPUT:
            self._edit_search(token)
            return

        action = self.keymap.resolve(token)
        if self.mode is DispatchMode.SEARCH_COMMITTED:
            if action is Action.SEARCH_NEXT:
                self._run_search(SearchDirection.NEXT)
                return
            if action is Action.SEARCH_PREVIOUS:
                self._run_search(SearchDirection.PREVIOUS)
                return
            self._end_search()

        if action is not None:
            self.handle(action)

    def handle(self, action: Action) -> None:
        """Apply one action."""
        logger.debug(f"Action: {action.value}")

        if action in MOVEMENT_ACTIONS:
            self.apply_movement(action)
        elif action is Action.CHORD:
            self.mode = DispatchMode.AWAITING_CHORD
        elif action is Action.PLAY_PAUSE:
            self.player.toggle_pause()
        elif action is Action.STOP:
            self.player.stop()
        elif action is Action.NEXT:
            self.player.next()
        elif action is Action.PREVIOUS:
            self.player.previous()
        elif action is Action.REPEAT:
            self.playlist.toggle_repeat()
        elif action is Action.SHUFFLE:
            self.playlist.toggle_shuffle()
        elif action is Action.QUIT:
            self.quit_requested = True
        elif action is Action.ADD:
            if self.state.current_view is View.INFO:
                self.add_to_playlist()
        elif action is Action.ADD_AND_PLAY:
            self._add_and_play()
        elif action is Action.REMOVE_ONE:
            if self.state.current_view is View.PLAYLIST:
                self.playlist.remove_selected(self.player.stop)
        elif action is Action.REMOVE_ALL:
            if self.state.current_view is View.PLAYLIST:
                self.playlist.remove_all(self.player.stop)
        elif action is Action.MAIN_VIEW:
            self.state = switch_view(self.state, View.INFO)
        elif action is Action.PLAYLIST_VIEW:
            self.state = switch_view(self.state, View.PLAYLIST)
        elif action is Action.RESIZE:
            self.state = replace(self.state, redraw=True)
        elif action is Action.SEARCH:
            self._start_search()
        # search_next / search_previous only mean something inside a search

    def apply_movement(self, action: Action) -> None:
        """Move the active cursor, then load whatever the new selection needs."""
        if self.state.current_view is View.PLAYLIST:
            if action is Action.UP:
                self.playlist.move_selection(-1)
            elif action is Action.DOWN:
                self.playlist.move_selection(1)
            elif action is Action.TOP:
                self.playlist.select_first()
            elif action is Action.BOTTOM:
                self.playlist.select_last()
            return

        if action is Action.LEFT:
            self.state = shift_panel(self.state, -1)
        elif action is Action.RIGHT:
            self.state = shift_panel(self.state, 1)
        else:
            panel = self.state.current_panel
            length = len(self.panel_names(panel))
            if length == 0:
                return
            index = panel_index(self.state, panel)
            if action is Action.UP:
                index = max(index - 1, 0)
            elif action is Action.DOWN:
                index = min(index + 1, length - 1)
            elif action is Action.TOP:
                index = 0
            else:
                index = length - 1
            self.state = with_panel_index(self.state, panel, index)

        self.ensure_selection()

    def add_to_playlist(self) -> int:
        """Queue what the active panel points at.

        Artists adds every song of every album of the artist, fetching albums
        on demand; Albums adds the album; Songs adds the one song.

        Returns:
            Index of the first added entry (0 when the playlist was empty)
        """
        first = self.playlist.size
        artist = self.current_artist
        if artist is None:
            return first

        panel = self.state.current_panel
        if panel is Panel.ARTISTS:
            for album in self.catalog.ensure_albums(artist.id):
                for song in self.catalog.ensure_songs(artist.id, album.id):
                    self.playlist.add(song.id)
        elif panel is Panel.ALBUMS:
            album = self.current_album
            if album is not None:
                for song in self.catalog.ensure_songs(artist.id, album.id):
                    self.playlist.add(song.id)
        else:
            songs = self.songs
            if 0 <= self.state.song_index < len(songs):
                self.playlist.add(songs[self.state.song_index].id)

        logger.debug(f"Added {self.playlist.size - first} songs to the playlist")
        return first

    def _add_and_play(self) -> None:
        if self.state.current_view is View.INFO:
            index = self.add_to_playlist()
        else:
            index = self.playlist.selected_index
        if self.playlist.is_valid_index(index):
            self.player.play(index)

    # Search

    def _start_search(self) -> None:
        if not self.visible_names():
            return
        self._pre_search = (self.state, self.playlist.selected_index)
        self.search_engine.reset()
        self.mode = DispatchMode.SEARCH_INPUT
        self.state = replace(self.state, search_prompt="")

    def _edit_search(self, token: str) -> None:
        if token == "KEY_ESCAPE":
            self._cancel_search()
            return
        if token == "KEY_ENTER":
            self.mode = DispatchMode.SEARCH_COMMITTED
            return

        if token in ("KEY_BACKSPACE", "KEY_DELETE"):
            self.search_engine.backspace()
        elif len(token) == 1 and token.isprintable():
            self.search_engine.append(token)
        else:
            return

        self.state = replace(self.state, search_prompt=self.search_engine.query)
        self._run_search(SearchDirection.FRESH)

    def _run_search(self, direction: SearchDirection) -> None:
        index = self.search_engine.search(self.visible_names(), direction)
        if index is None:
            return

        if self.state.current_view is View.PLAYLIST:
            self.playlist.select(index)
            return

        self.state = with_panel_index(self.state, self.state.current_panel, index)
        self.ensure_selection()

    def _cancel_search(self) -> None:
        if self._pre_search is not None:
            saved, playlist_selection = self._pre_search
            self.state = replace(
                self.state,
                artist_index=saved.artist_index,
                album_index=saved.album_index,
                song_index=saved.song_index,
            )
            self.playlist.select(playlist_selection)
            self.ensure_selection()
        self._end_search()

    def _end_search(self) -> None:
        self.mode = DispatchMode.IDLE
        self._pre_search = None
        self.state = replace(self.state, search_prompt=None)
