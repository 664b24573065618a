"""Catalog domain - remote library access and the lazy-loading cache.

This domain handles:
- Subsonic API transport (RemoteCatalogService)
- Artist / Album / Song models
- At-most-once population of each catalog node
"""

from .cache import CatalogCache, approximate_duration
from .client import SubsonicClient
from .exceptions import (
    ApiStatusError,
    CatalogError,
    MalformedResponseError,
    TransportError,
)
from .models import Album, Artist, Catalog, Song

__all__ = [
    "CatalogCache",
    "approximate_duration",
    "SubsonicClient",
    "CatalogError",
    "TransportError",
    "ApiStatusError",
    "MalformedResponseError",
    "Album",
    "Artist",
    "Catalog",
    "Song",
]
