"""Shared fakes for the Subsonic server, the player process and the clock."""

import queue
from typing import Any, Optional

import pytest

from sksonic.domain.catalog import CatalogCache
from sksonic.domain.playback import (
    PlaybackController,
    PlayerBackend,
    PlayerEvent,
    PlayerEventKind,
)
from sksonic.domain.playlist import Playlist
from sksonic.navigation import KeyMap, NavigationDispatcher

# artist id -> (name, [(album id, album name, [(song id, title, duration)])])
LIBRARY = {
    "ar1": (
        "Apple Band",
        [
            ("al1", "First", [("s1", "One", 180), ("s2", "Two", 200)]),
            ("al2", "Second", [("s3", "Three", 150)]),
        ],
    ),
    "ar2": ("Banana Crew", [("al3", "Bananas", [("s4", "Split", 100)])]),
    "ar3": ("Cherry", []),
}


class FakeSubsonicClient:
    """Serves LIBRARY as Subsonic documents and records every call."""

    def __init__(self, library: dict = LIBRARY):
        self.library = library
        self.calls: list[tuple[str, Optional[str]]] = []

    def get_artists(self) -> dict[str, Any]:
        self.calls.append(("getArtists", None))
        return {
            "status": "ok",
            "artists": {
                "index": [
                    {
                        "name": "A-Z",
                        "artist": [
                            {"id": artist_id, "name": name}
                            for artist_id, (name, _) in self.library.items()
                        ],
                    }
                ]
            },
        }

    def get_artist(self, artist_id: str) -> dict[str, Any]:
        self.calls.append(("getArtist", artist_id))
        name, albums = self.library[artist_id]
        return {
            "status": "ok",
            "artist": {
                "id": artist_id,
                "name": name,
                "album": [{"id": album_id, "name": album_name} for album_id, album_name, _ in albums],
            },
        }

    def get_album(self, album_id: str) -> dict[str, Any]:
        self.calls.append(("getAlbum", album_id))
        for _, albums in self.library.values():
            for candidate_id, album_name, songs in albums:
                if candidate_id == album_id:
                    return {
                        "status": "ok",
                        "album": {
                            "id": album_id,
                            "name": album_name,
                            "song": [
                                {"id": song_id, "title": title, "duration": duration}
                                for song_id, title, duration in songs
                            ],
                        },
                    }
        raise KeyError(album_id)

    def stream_url(self, song_id: str) -> str:
        return f"http://music.test/rest/stream?id={song_id}"

    def count(self, operation: str, item_id: Optional[str] = None) -> int:
        return sum(1 for call in self.calls if call == (operation, item_id))


class FakeBackend(PlayerBackend):
    """Player backend that reports events synchronously and records signals.

    start_mode: "start" reports STARTED, "fail" reports FAILED and "silent"
    reports nothing (the caller then falls back to find_pid()).
    """

    def __init__(self, start_mode: str = "start", found_pid: Optional[int] = None):
        self.start_mode = start_mode
        self.found_pid = found_pid
        self.spawned: list[tuple[str, int]] = []
        self.signals: list[tuple[str, int]] = []
        self.events: Optional["queue.Queue[PlayerEvent]"] = None

    def pid_for(self, generation: int) -> int:
        return 1000 + generation

    def spawn(self, url: str, generation: int, events: "queue.Queue[PlayerEvent]") -> None:
        self.spawned.append((url, generation))
        self.events = events
        if self.start_mode == "start":
            events.put(
                PlayerEvent(PlayerEventKind.STARTED, generation, pid=self.pid_for(generation))
            )
        elif self.start_mode == "fail":
            events.put(PlayerEvent(PlayerEventKind.FAILED, generation, error="not found"))

    def exit(self, generation: int, returncode: int = 0) -> None:
        """Simulate the player process finishing on its own."""
        assert self.events is not None
        self.events.put(
            PlayerEvent(
                PlayerEventKind.EXITED,
                generation,
                pid=self.pid_for(generation),
                returncode=returncode,
            )
        )

    def pause(self, pid: int) -> None:
        self.signals.append(("pause", pid))

    def resume(self, pid: int) -> None:
        self.signals.append(("resume", pid))

    def terminate(self, pid: int) -> None:
        self.signals.append(("terminate", pid))

    def find_pid(self) -> Optional[int]:
        return self.found_pid


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def client() -> FakeSubsonicClient:
    return FakeSubsonicClient()


@pytest.fixture
def catalog(client: FakeSubsonicClient) -> CatalogCache:
    """Catalog with the artist list already loaded."""
    cache = CatalogCache(client)
    cache.load_artists()
    return cache


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def playlist() -> Playlist:
    return Playlist()


@pytest.fixture
def player(
    playlist: Playlist,
    catalog: CatalogCache,
    client: FakeSubsonicClient,
    backend: FakeBackend,
    clock: FakeClock,
) -> PlaybackController:
    return PlaybackController(
        playlist, catalog, client, backend, clock=clock, spawn_timeout=0
    )


@pytest.fixture
def dispatcher(
    catalog: CatalogCache, playlist: Playlist, player: PlaybackController
) -> NavigationDispatcher:
    """Dispatcher with the first artist selected and its panels loaded."""
    nav = NavigationDispatcher(catalog, playlist, player, KeyMap.from_config())
    nav.initialize()
    return nav
