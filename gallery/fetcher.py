"""
Encapsulates the HTTP fetch against the fox provider (httpx).
Keeps network code separate from batch orchestration.
"""
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from gallery.errors import FetcherUnavailableError

logger = structlog.get_logger(__name__)


class FetchResult:
    def __init__(
        self,
        url: str,
        status_code: int,
        content: bytes = b'',
        headers: Dict[str, str] = None,
        final_url: str = None,
        fetch_time: float = 0.0,
        error: str = None,
        content_type: str = None,
    ):
        """Initialize a FetchResult with HTTP response data and metadata."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.final_url = final_url or url
        self.fetch_time = fetch_time
        self.error = error
        self.content_type = content_type

    @property
    def success(self) -> bool:
        """Check if the fetch was successful (no error and 2xx status code)."""
        return self.error is None and 200 <= self.status_code < 300

    @property
    def size(self) -> int:
        return len(self.content)


class HTTPFetcher:
    def __init__(
        self,
        user_agent: str = 'FoxGallery/1.0',
        timeout: float = 10.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        max_response_size: int = 1024 * 1024,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the HTTP fetcher with a shared AsyncClient."""
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_response_size = max_response_size

        headers = {
            'User-Agent': self.user_agent,
            'Accept': 'application/json',
        }
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=follow_redirects,
            headers=headers,
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            transport=transport,
        )

    @classmethod
    def from_config(cls, fetcher_config: Dict[str, Any], **kwargs) -> "HTTPFetcher":
        """Build a fetcher from the ``fetcher`` section of the config."""
        options = {
            key: fetcher_config[key]
            for key in ('user_agent', 'timeout', 'max_connections',
                        'max_keepalive_connections', 'max_response_size',
                        'follow_redirects')
            if key in fetcher_config
        }
        options.update(kwargs)
        return cls(**options)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def fetch(self, url: str, headers: Dict[str, str] = None) -> FetchResult:
        """GET a URL and return a FetchResult.

        Transport failures come back as a FetchResult with ``error`` set.
        FetcherUnavailableError is raised only when no request can be made at
        all: the client is closed or the URL is not requestable.
        """
        if self.closed:
            raise FetcherUnavailableError("HTTP client is closed")

        start_time = time.time()

        try:
            response = await self._client.get(url, headers=headers or {})
            fetch_time = time.time() - start_time

            content_length = response.headers.get('content-length')
            if content_length and int(content_length) > self.max_response_size:
                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    final_url=str(response.url),
                    fetch_time=fetch_time,
                    error=f"Content too large: {content_length} bytes > {self.max_response_size} bytes"
                )

            content = response.content
            if len(content) > self.max_response_size:
                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    final_url=str(response.url),
                    fetch_time=fetch_time,
                    error=f"Content too large: {len(content)} bytes > {self.max_response_size} bytes"
                )

            return FetchResult(
                url=url,
                status_code=response.status_code,
                content=content,
                headers=dict(response.headers),
                final_url=str(response.url),
                fetch_time=fetch_time,
                content_type=response.headers.get('content-type', '').lower(),
            )

        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise FetcherUnavailableError(f"Cannot request {url!r}: {e}") from e

        except httpx.TimeoutException as e:
            error = f"Timeout after {self.timeout}s: {e}"
            logger.warning("fetch_timeout", url=url, error=str(e))

        except httpx.TransportError as e:
            error = f"Transport error: {e}"
            logger.warning("fetch_transport_error", url=url, error=str(e))

        return FetchResult(
            url=url,
            status_code=0,
            fetch_time=time.time() - start_time,
            error=error,
        )

    async def close(self):
        """Release the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPFetcher":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
