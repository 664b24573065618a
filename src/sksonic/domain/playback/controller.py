"""
Playback controller.

State machine over {STOPPED, PLAYING, PAUSED} driving one external player
process. The controller is only ever touched by the main loop; the spawn
threads talk to it exclusively through the events queue, which tick() drains.

Status becomes PLAYING only once the player is confirmed to be running,
either by a STARTED event within ``spawn_timeout`` or by a process table
lookup. An unconfirmed play leaves the controller STOPPED with a pending
generation that a late STARTED event can still promote.
"""

import queue
import time
from typing import Callable, Optional

from loguru import logger

from sksonic.core.output import log
from sksonic.domain.catalog import CatalogCache, Song, SubsonicClient
from sksonic.domain.playlist import Playlist

from .exceptions import InvalidIndexError
from .process import PlayerBackend
from .state import NowPlaying, PlaybackStatus, PlayerEvent, PlayerEventKind

Observer = Callable[[NowPlaying], None]


class PlaybackController:
    """Owns the player process handle and the elapsed-time counter."""

    def __init__(
        self,
        playlist: Playlist,
        catalog: CatalogCache,
        client: SubsonicClient,
        backend: PlayerBackend,
        clock: Callable[[], float] = time.monotonic,
        spawn_timeout: float = 0.2,
        on_track_change: Optional[Observer] = None,
        on_transition: Optional[Observer] = None,
    ):
        self.playlist = playlist
        self.catalog = catalog
        self.client = client
        self.backend = backend
        self.clock = clock
        self.spawn_timeout = spawn_timeout
        self.on_track_change = on_track_change
        self.on_transition = on_transition

        self.events: "queue.Queue[PlayerEvent]" = queue.Queue()
        self.status = PlaybackStatus.STOPPED
        self.elapsed = 0.0
        self.pid: Optional[int] = None
        self.generation = 0
        self.pending_generation: Optional[int] = None
        self._last_sample: Optional[float] = None

    @property
    def current_song(self) -> Optional[Song]:
        song_id = self.playlist.song_id_at(self.playlist.current_index)
        if song_id is None:
            return None
        return self.catalog.find_song(song_id)

    def snapshot(self) -> NowPlaying:
        """Current state for the now-playing line and the observers."""
        if self.status is PlaybackStatus.STOPPED:
            return NowPlaying(status=self.status, time=int(time.time()))

        song_id = self.playlist.song_id_at(self.playlist.current_index)
        song = self.current_song
        artist, album = self.catalog.song_context(song_id) if song_id else (None, None)
        return NowPlaying(
            status=self.status,
            artist=artist.name if artist else "",
            album=album.name if album else "",
            song=song.name if song else "",
            length=song.duration if song else 0,
            playtime=int(self.elapsed),
            time=int(time.time()),
        )

    def _notify(self, observer: Optional[Observer]) -> None:
        if observer is not None:
            observer(self.snapshot())

    # Transitions

    def play(self, index: int) -> None:
        """Start playing the playlist entry at index.

        Raises:
            InvalidIndexError: If index is out of range (no state change)
        """
        if not self.playlist.is_valid_index(index):
            raise InvalidIndexError(index, self.playlist.size)

        self._release_player()

        song_id = self.playlist.song_id_at(index)
        self.playlist.current_index = index
        self.generation += 1
        generation = self.generation
        self.pending_generation = generation
        self.elapsed = 0.0
        self._last_sample = self.clock()

        self.backend.spawn(self.client.stream_url(song_id), generation, self.events)

        event = self._wait_for_start(generation)
        if event is None:
            pid = self.backend.find_pid()
            if pid is None:
                log("Player did not start yet, waiting for it", "warning")
                return
            self._confirm_started(pid)
        elif event.kind is PlayerEventKind.FAILED:
            self._spawn_failed(event)
        else:
            self._confirm_started(event.pid)

    def _wait_for_start(self, generation: int) -> Optional[PlayerEvent]:
        """Block up to spawn_timeout for this generation's STARTED/FAILED event.

        Events about older generations are handled as they come in.
        """
        deadline = time.monotonic() + self.spawn_timeout
        while True:
            remaining = deadline - time.monotonic()
            try:
                event = self.events.get(timeout=max(remaining, 0))
            except queue.Empty:
                return None
            if event.generation == generation and event.kind is not PlayerEventKind.EXITED:
                return event
            self._handle_event(event)

    def _confirm_started(self, pid: Optional[int]) -> None:
        self.pending_generation = None
        self.pid = pid
        self.status = PlaybackStatus.PLAYING
        self._last_sample = self.clock()
        song = self.current_song
        logger.info(f"Playing '{song.name if song else '?'}' (pid={pid})")
        self._notify(self.on_track_change)
        self._notify(self.on_transition)

    def _adopt_pid(self, pid: int) -> None:
        """Track the PID the spawn thread reported over a process table guess."""
        logger.info(f"Player reported pid {pid}, replacing {self.pid}")
        self.pid = pid
        if self.status is PlaybackStatus.PAUSED:
            self.backend.pause(pid)

    def _spawn_failed(self, event: PlayerEvent) -> None:
        self.pending_generation = None
        self.pid = None
        self.status = PlaybackStatus.STOPPED
        self._last_sample = None
        log(f"Could not start player: {event.error}", "error")
        self._notify(self.on_transition)

    def pause(self) -> None:
        if self.status is not PlaybackStatus.PLAYING:
            return
        self._sample()
        if self.pid is not None:
            self.backend.pause(self.pid)
        self.status = PlaybackStatus.PAUSED
        self._last_sample = None
        self._notify(self.on_transition)

    def resume(self) -> None:
        if self.status is not PlaybackStatus.PAUSED:
            return
        if self.pid is not None:
            self.backend.resume(self.pid)
        self.status = PlaybackStatus.PLAYING
        # New baseline; the elapsed counter keeps the position
        self._last_sample = self.clock()
        self._notify(self.on_transition)

    def toggle_pause(self) -> None:
        if self.status is PlaybackStatus.PLAYING:
            self.pause()
        elif self.status is PlaybackStatus.PAUSED:
            self.resume()

    def stop(self) -> None:
        if self.status is PlaybackStatus.STOPPED and self.pending_generation is None:
            return
        self._release_player()
        self.status = PlaybackStatus.STOPPED
        self.elapsed = 0.0
        self._notify(self.on_transition)

    def _release_player(self) -> None:
        """Terminate the tracked player and retire its generation."""
        if self.pid is not None:
            self.backend.terminate(self.pid)
            if self.status is PlaybackStatus.PAUSED:
                # A stopped process only acts on SIGTERM once continued
                self.backend.resume(self.pid)
        self.pid = None
        self.pending_generation = None
        self.status = PlaybackStatus.STOPPED
        self._last_sample = None
        self.generation += 1

    def next(self) -> None:
        index = self.playlist.current_index + 1
        if self.playlist.is_valid_index(index):
            self.play(index)

    def previous(self) -> None:
        index = self.playlist.current_index - 1
        if self.playlist.is_valid_index(index):
            self.play(index)

    def shutdown(self) -> None:
        """Stop whatever is still running before the process exits."""
        self.stop()

    # Main loop hook

    def _sample(self) -> None:
        now = self.clock()
        if self._last_sample is not None:
            self.elapsed += now - self._last_sample
        self._last_sample = now

    def tick(self) -> None:
        """Drain player events, then advance when the song has run its length."""
        self._drain_events()
        if self.status is not PlaybackStatus.PLAYING:
            return

        self._sample()
        song = self.current_song
        # Unknown durations (0) finish through the player's exit instead
        if song is not None and song.duration > 0 and self.elapsed >= song.duration:
            self._advance()

    def _advance(self) -> None:
        index = self.playlist.advance()
        if index is None:
            self.stop()
        else:
            self.play(index)

    def _drain_events(self) -> None:
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return
            self._handle_event(event)

    def _handle_event(self, event: PlayerEvent) -> None:
        current = event.generation == self.generation

        if event.kind is PlayerEventKind.STARTED:
            if current and self.pending_generation == event.generation:
                self._confirm_started(event.pid)
            elif current and event.pid is not None and event.pid != self.pid:
                self._adopt_pid(event.pid)
            elif not current and event.pid is not None:
                # A player we gave up on came up after all
                logger.debug(f"Terminating stale player {event.pid}")
                self.backend.terminate(event.pid)
            return

        if not current:
            logger.debug(f"Ignoring {event.kind.value} event of generation {event.generation}")
            return

        if event.kind is PlayerEventKind.FAILED:
            self._spawn_failed(event)
            return

        # EXITED on its own, we never signalled it
        if self.pending_generation == event.generation:
            self.pending_generation = None
            log(f"Player exited with status {event.returncode} before starting", "error")
        elif event.returncode == 0 and self.status is PlaybackStatus.PLAYING:
            self.pid = None
            self._advance()
        elif self.status is not PlaybackStatus.STOPPED:
            self.pid = None
            self.status = PlaybackStatus.STOPPED
            self._last_sample = None
            self.elapsed = 0.0
            log(f"Player exited with status {event.returncode}", "error")
            self._notify(self.on_transition)
