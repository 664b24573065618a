"""
Subsonic API client.

Thin transport layer: every call is a GET carrying the fixed credential,
version and client parameters plus an optional ``id``. Responses are the
``subsonic-response`` envelope; anything other than status "ok" raises.
"""

from typing import Any, Dict, Optional

import requests
from loguru import logger

from sksonic.core.config import ServerConfig

from .exceptions import ApiStatusError, MalformedResponseError, TransportError

# Operation name -> REST path
OPERATION_PATHS = {
    "ping": "rest/ping.view",
    "getArtists": "rest/getArtists",
    "getArtist": "rest/getArtist",
    "getAlbum": "rest/getAlbum",
    "stream": "rest/stream",
}


class SubsonicClient:
    """RemoteCatalogService implementation over HTTP."""

    def __init__(self, server: ServerConfig):
        self.server = server

    @property
    def base_url(self) -> str:
        """Server URL with the port appended when one is configured."""
        if self.server.port:
            return f"{self.server.url}:{self.server.port}"
        return self.server.url

    def _url(self, operation: str) -> str:
        return f"{self.base_url}/{OPERATION_PATHS[operation]}"

    def _params(self, item_id: Optional[str] = None) -> Dict[str, str]:
        params = {
            "f": "json",
            "u": self.server.user,
            "p": self.server.password,
            "v": self.server.api_version,
            "c": self.server.client,
        }
        if item_id is not None:
            params["id"] = item_id
        return params

    def request(self, operation: str, item_id: Optional[str] = None) -> Dict[str, Any]:
        """Perform one API call and return the unwrapped response body.

        Args:
            operation: Key of OPERATION_PATHS
            item_id: Optional ``id`` parameter

        Returns:
            The ``subsonic-response`` object

        Raises:
            TransportError: Network failure or HTTP error status
            MalformedResponseError: Body is not a Subsonic JSON envelope
            ApiStatusError: Envelope status is not "ok"
        """
        # Never log the URL itself: it carries the password
        logger.debug(f"Requesting {operation} (id={item_id})")

        try:
            response = requests.get(
                self._url(operation),
                params=self._params(item_id),
                timeout=self.server.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"{operation} request failed: {e}") from e

        try:
            document = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{operation} returned invalid JSON") from e

        body = document.get("subsonic-response") if isinstance(document, dict) else None
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"{operation} response has no 'subsonic-response' envelope"
            )

        status = body.get("status")
        if status != "ok":
            error = body.get("error")
            message = error.get("message") if isinstance(error, dict) else None
            raise ApiStatusError(operation, str(status), message)

        return body

    def ping(self) -> Dict[str, Any]:
        return self.request("ping")

    def get_artists(self) -> Dict[str, Any]:
        return self.request("getArtists")

    def get_artist(self, artist_id: str) -> Dict[str, Any]:
        return self.request("getArtist", artist_id)

    def get_album(self, album_id: str) -> Dict[str, Any]:
        return self.request("getAlbum", album_id)

    def stream_url(self, song_id: str) -> str:
        """Build the streaming URL handed to the external player."""
        prepared = requests.Request(
            "GET", self._url("stream"), params=self._params(song_id)
        ).prepare()
        return prepared.url
