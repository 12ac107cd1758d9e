"""Network access for release sources."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = ["HttpClient", "HttpError", "MockHttpClient", "RealHttpClient"]
