"""Tests for pkgrel.platform.http."""

from __future__ import annotations

from pkgrel.core.result import Err, Ok
from pkgrel.platform.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


def test_http_error_str() -> None:
    assert str(HttpError("https://x", 404, "Not Found")) == "HTTP 404: Not Found (https://x)"
    assert str(HttpError("https://x", 0, "timed out")) == "timed out (https://x)"


def test_real_client_headers() -> None:
    client = RealHttpClient(token="abc")
    headers = client._headers()  # pyright: ignore[reportPrivateUsage]
    assert headers["Authorization"] == "token abc"
    assert headers["User-Agent"].startswith("pkgrel/")
    assert "Authorization" not in RealHttpClient()._headers()  # pyright: ignore[reportPrivateUsage]


def test_clients_satisfy_protocol() -> None:
    assert isinstance(RealHttpClient(), HttpClient)
    assert isinstance(MockHttpClient(), HttpClient)


def test_mock_client() -> None:
    client = MockHttpClient()
    client.set_json("https://a", {"title": "x"})
    client.set_json("https://b", HttpError("https://b", 500, "boom"))

    assert client.get_json("https://a") == Ok({"title": "x"})
    assert isinstance(client.get_json("https://b"), Err)
    missing = client.get_json("https://c")
    assert isinstance(missing, Err) and missing.error.status == 404
    assert client.calls == ["https://a", "https://b", "https://c"]
