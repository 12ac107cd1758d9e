"""HTTP client abstraction for release sources.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses keyed by URL, for tests
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from canopy import __version__
from canopy.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors and bad payloads)
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
    """Protocol for the GET requests release sources need."""

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Fetch URL and decode JSON (object or array)."""
        ...

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and decode as UTF-8 text."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Every request is bounded by `timeout`; an expired timeout is reported
    like any other network failure.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = f"canopy/{__version__}",
        token: str | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            token: Optional bearer token, sent to api.github.com only
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self, url: str) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if url.startswith("https://api.github.com/"):
            headers["Accept"] = "application/vnd.github+json"
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, url: str) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers(url))
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[object, HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result
        try:
            data: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_text(self, url: str) -> Result[str, HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result
        try:
            return Ok(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r/releases?per_page=1&page=1", [])
        result = client.get_json("https://api.github.com/repos/o/r/releases?per_page=1&page=1")
        assert result == Ok([])
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object | HttpError] = {}
        self._text_responses: dict[str, str | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._json_responses[url] = response

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def get_json(self, url: str) -> Result[object, HttpError]:
        self.calls.append(("get_json", url))
        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))
        if url not in self._text_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = self._text_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def urls(self) -> list[str]:
        """URLs requested so far, in order."""
        return [url for _, url in self.calls]
