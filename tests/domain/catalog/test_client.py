"""Tests for the Subsonic HTTP client."""

from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from sksonic.core.config import ServerConfig
from sksonic.domain.catalog import (
    ApiStatusError,
    MalformedResponseError,
    SubsonicClient,
    TransportError,
)


@pytest.fixture
def server() -> ServerConfig:
    return ServerConfig(url="http://music.test", port=4533, user="alice", password="s3cret")


def _response(document) -> MagicMock:
    response = MagicMock()
    response.json.return_value = document
    return response


class TestRequest:
    """Tests for SubsonicClient.request."""

    def test_ok_returns_body(self, server: ServerConfig) -> None:
        document = {"subsonic-response": {"status": "ok", "version": "1.16.1"}}
        with patch("sksonic.domain.catalog.client.requests.get", return_value=_response(document)) as get:
            body = SubsonicClient(server).ping()

        assert body["status"] == "ok"
        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        assert url == "http://music.test:4533/rest/ping.view"
        assert params == {"f": "json", "u": "alice", "p": "s3cret", "v": "1.16.1", "c": "sksonic"}
        assert get.call_args.kwargs["timeout"] == 30.0

    def test_id_parameter(self, server: ServerConfig) -> None:
        document = {"subsonic-response": {"status": "ok", "album": {}}}
        with patch("sksonic.domain.catalog.client.requests.get", return_value=_response(document)) as get:
            SubsonicClient(server).get_album("al-7")

        assert get.call_args.args[0].endswith("/rest/getAlbum")
        assert get.call_args.kwargs["params"]["id"] == "al-7"

    def test_failed_status(self, server: ServerConfig) -> None:
        """A non-ok envelope raises with the server's message."""
        document = {
            "subsonic-response": {
                "status": "failed",
                "error": {"code": 40, "message": "Wrong username or password"},
            }
        }
        with patch("sksonic.domain.catalog.client.requests.get", return_value=_response(document)):
            with pytest.raises(ApiStatusError) as exc_info:
                SubsonicClient(server).get_artists()

        assert exc_info.value.status == "failed"
        assert exc_info.value.server_message == "Wrong username or password"

    def test_transport_error(self, server: ServerConfig) -> None:
        with patch(
            "sksonic.domain.catalog.client.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ):
            with pytest.raises(TransportError):
                SubsonicClient(server).get_artists()

    def test_http_error_status(self, server: ServerConfig) -> None:
        response = _response({})
        response.raise_for_status.side_effect = requests.HTTPError("500")
        with patch("sksonic.domain.catalog.client.requests.get", return_value=response):
            with pytest.raises(TransportError):
                SubsonicClient(server).get_artists()

    def test_invalid_json(self, server: ServerConfig) -> None:
        response = MagicMock()
        response.json.side_effect = ValueError("not json")
        with patch("sksonic.domain.catalog.client.requests.get", return_value=response):
            with pytest.raises(MalformedResponseError):
                SubsonicClient(server).get_artists()

    def test_missing_envelope(self, server: ServerConfig) -> None:
        with patch("sksonic.domain.catalog.client.requests.get", return_value=_response({"status": "ok"})):
            with pytest.raises(MalformedResponseError):
                SubsonicClient(server).get_artists()


class TestUrls:
    """Tests for URL construction."""

    def test_base_url_without_port(self) -> None:
        client = SubsonicClient(ServerConfig(url="https://music.test", port=None))
        assert client.base_url == "https://music.test"

    def test_stream_url(self, server: ServerConfig) -> None:
        url = SubsonicClient(server).stream_url("s 1")
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.path == "/rest/stream"
        assert parsed.port == 4533
        assert query["id"] == ["s 1"]
        assert query["u"] == ["alice"]
        assert query["f"] == ["json"]
