"""Platform adapters: subprocess and HTTP."""

from pkgrel.platform.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from pkgrel.platform.process import ProcessError, run

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "ProcessError",
    "RealHttpClient",
    "run",
]
