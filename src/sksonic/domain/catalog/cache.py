"""
Lazy-loading catalog cache.

Mirrors the remote Artist -> Album -> Song hierarchy. The artist list is
fetched once at startup; each artist's albums and each album's songs are
fetched on first use and memoized, so every node costs at most one remote
call per process lifetime.
"""

from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from .client import SubsonicClient
from .exceptions import MalformedResponseError
from .models import Album, Artist, Catalog, Song


def _as_list(value: Any) -> List[Any]:
    """Subsonic servers may collapse single-element arrays into objects."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def approximate_duration(song: Dict[str, Any]) -> int:
    """Estimate a song's duration in seconds from its size and bit rate.

    Uses size * 8 / bitRate / 1000 (size in bytes, bitRate in kbps). Returns 0
    when either field is missing or the bit rate is zero.
    """
    try:
        size = int(song["size"])
        rate = int(song["bitRate"])
    except (KeyError, TypeError, ValueError):
        return 0
    if rate <= 0:
        return 0
    return size * 8 // rate // 1000


def parse_artists(body: Dict[str, Any]) -> List[Artist]:
    """Flatten getArtists' alphabetical index into an ordered artist list."""
    try:
        artists = []
        for index in _as_list(body["artists"].get("index")):
            for artist in _as_list(index.get("artist")):
                artists.append(Artist(id=str(artist["id"]), name=str(artist["name"])))
        return artists
    except (KeyError, TypeError, AttributeError) as e:
        raise MalformedResponseError(f"Unexpected getArtists document: {e!r}") from e


def parse_albums(body: Dict[str, Any]) -> List[Album]:
    """Parse getArtist's album list."""
    try:
        return [
            Album(id=str(album["id"]), name=str(album["name"]))
            for album in _as_list(body["artist"].get("album"))
        ]
    except (KeyError, TypeError, AttributeError) as e:
        raise MalformedResponseError(f"Unexpected getArtist document: {e!r}") from e


def parse_songs(body: Dict[str, Any]) -> List[Song]:
    """Parse getAlbum's song list, approximating missing durations."""
    try:
        songs = []
        for song in _as_list(body["album"].get("song")):
            if "duration" in song:
                duration = int(song["duration"])
            else:
                duration = approximate_duration(song)
            songs.append(Song(id=str(song["id"]), name=str(song["title"]), duration=duration))
        return songs
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(f"Unexpected getAlbum document: {e!r}") from e


class CatalogCache:
    """Owns the catalog tree and populates it on demand."""

    def __init__(self, client: SubsonicClient):
        self.client = client
        self.catalog = Catalog()
        self.loaded = False
        # Song id -> song / owning nodes, filled as albums are populated
        self._songs: Dict[str, Song] = {}
        self._song_parents: Dict[str, Tuple[Artist, Album]] = {}

    @property
    def artists(self) -> List[Artist]:
        return self.catalog.artists

    def load_artists(self) -> List[Artist]:
        """Fetch the full artist list. Only the first call hits the server."""
        if self.loaded:
            return self.catalog.artists

        self.catalog.artists = parse_artists(self.client.get_artists())
        self.loaded = True
        logger.info(f"Loaded {len(self.catalog.artists)} artists")
        return self.catalog.artists

    def find_artist(self, artist_id: str) -> Optional[Artist]:
        for artist in self.catalog.artists:
            if artist.id == artist_id:
                return artist
        return None

    def find_album(self, artist: Artist, album_id: str) -> Optional[Album]:
        for album in artist.albums:
            if album.id == album_id:
                return album
        return None

    def ensure_albums(self, artist_id: str) -> List[Album]:
        """Make sure the artist's albums are loaded and return them.

        Idempotent: once the artist is populated no further request is made.
        Unknown ids are ignored and yield an empty list.
        """
        artist = self.find_artist(artist_id)
        if artist is None:
            logger.warning(f"ensure_albums: unknown artist id {artist_id}")
            return []
        if artist.populated:
            return artist.albums

        artist.albums = parse_albums(self.client.get_artist(artist.id))
        artist.populated = True
        logger.debug(f"Fetched {len(artist.albums)} albums for '{artist.name}'")
        return artist.albums

    def ensure_songs(self, artist_id: str, album_id: str) -> List[Song]:
        """Make sure the album's songs are loaded and return them.

        Idempotent: once the album is populated no further request is made.
        The owning artist's albums are ensured first.
        """
        artist = self.find_artist(artist_id)
        if artist is None:
            logger.warning(f"ensure_songs: unknown artist id {artist_id}")
            return []
        self.ensure_albums(artist.id)

        album = self.find_album(artist, album_id)
        if album is None:
            logger.warning(f"ensure_songs: unknown album id {album_id}")
            return []
        if album.populated:
            return album.songs

        album.songs = parse_songs(self.client.get_album(album.id))
        album.populated = True
        for song in album.songs:
            self._songs[song.id] = song
            self._song_parents[song.id] = (artist, album)
        logger.debug(f"Fetched {len(album.songs)} songs for '{album.name}'")
        return album.songs

    def find_song(self, song_id: str) -> Optional[Song]:
        """Resolve a playlist entry back to its song."""
        return self._songs.get(song_id)

    def song_context(self, song_id: str) -> Tuple[Optional[Artist], Optional[Album]]:
        """Return the (artist, album) owning a song, or (None, None)."""
        return self._song_parents.get(song_id, (None, None))
