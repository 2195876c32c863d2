"""
Fetching of remote resources in their entirety, either as raw bytes (archives) or as decoded JSON (REST API pages).

There are no partial or ranged reads and no retries: a resource is either fetched completely or the fetch fails with a
`FetchError`.
"""

import requests

from logging import getLogger
from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from zipfeed.config import ClientConfig


logger = getLogger(__name__)


DEFAULT_TIMEOUT = 30.0


class FetchError(RuntimeError):
    url: str

    def __init__(self, url: str, message: str):
        self.url = url

        super().__init__(f"Failed to fetch {url}: {message}")


class ByteSource:
    """
    Fetches whole resources over HTTP(S) using a `requests` session.

    The source can be used as a context manager, in which case the session is closed on exit (but only if the source
    created it itself).
    """

    _session: requests.Session
    _owns_session: bool
    _timeout: Optional[float]
    _headers: Mapping[str, str]

    def __init__(
        self, session: Optional[requests.Session] = None, timeout: Optional[float] = DEFAULT_TIMEOUT,
        headers: Optional[Mapping[str, str]] = None
    ):
        self._owns_session = session is None
        self._session = requests.Session() if session is None else session
        self._timeout = timeout
        self._headers = dict(headers or {})

    @classmethod
    def from_config(cls, config: 'ClientConfig', session: Optional[requests.Session] = None) -> 'ByteSource':
        return cls(session=session, timeout=config.timeout, headers=config.headers)

    def fetch_bytes(self, url: str) -> bytes:
        """
        Fetches the resource at `url` and returns its full body.

        Raises:
            FetchError: On any network failure or non-success HTTP status.
        """
        response = self._get(url)
        data = response.content

        logger.debug(f"Received {len(data)} bytes from {url}")

        return data

    def fetch_json(self, url: str) -> Any:
        """
        Fetches the resource at `url` and decodes its body as JSON.

        Raises:
            FetchError: On any network failure, non-success HTTP status, or if the body is not valid JSON.
        """
        response = self._get(url)

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(url, f"response is not valid JSON ({e})") from e

    def _get(self, url: str) -> requests.Response:
        logger.debug(f"GET {url}")

        try:
            response = self._session.get(url, headers=self._headers, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        return response

    def close(self):
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> 'ByteSource':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def fetch_bytes(
    url: str, timeout: Optional[float] = DEFAULT_TIMEOUT, headers: Optional[Mapping[str, str]] = None
) -> bytes:
    """
    Shortcut for fetching a single resource with a throwaway `ByteSource`.
    """
    with ByteSource(timeout=timeout, headers=headers) as source:
        return source.fetch_bytes(url)


def fetch_json(
    url: str, timeout: Optional[float] = DEFAULT_TIMEOUT, headers: Optional[Mapping[str, str]] = None
) -> Any:
    with ByteSource(timeout=timeout, headers=headers) as source:
        return source.fetch_json(url)
