"""HTTP client for GitHub API reads.

This module provides:
- HttpClient: Protocol for JSON GETs (injectable for tests)
- RealHttpClient: urllib implementation with optional token auth
- MockHttpClient: canned responses for tests
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from pkgrel import __version__
from pkgrel.core.result import Err, Ok, Result
from pkgrel.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network and parse errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for read-only JSON requests."""

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object."""
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(
        self,
        timeout: float = 30.0,
        token: str | None = None,
        user_agent: str = f"pkgrel/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.token = token
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _request(self, url: str) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=e.reason))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r/pulls/1?state=closed", {...})
        result = client.get_json("https://api.github.com/repos/o/r/pulls/1?state=closed")
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self.calls: list[str] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        self.calls.append(url)

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
