"""
Catalog domain models.

The remote library is a three-level tree: Artist -> Album -> Song. Artists are
loaded once at startup; albums and songs are fetched lazily and flagged as
``populated`` so they are never fetched twice.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Song:
    """A playable song. Immutable once fetched."""

    id: str
    name: str
    duration: int  # in seconds


@dataclass
class Album:
    """An album and, once populated, its songs in server order."""

    id: str
    name: str
    songs: list[Song] = field(default_factory=list)
    populated: bool = False


@dataclass
class Artist:
    """An artist and, once populated, its albums in server order."""

    id: str
    name: str
    albums: list[Album] = field(default_factory=list)
    populated: bool = False


@dataclass
class Catalog:
    """The full artist list, built once per run."""

    artists: list[Artist] = field(default_factory=list)
