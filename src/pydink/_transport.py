"""HTTP transport used to download remote source files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pydink._constants import USER_AGENT
from pydink.config import DinkConfig
from pydink.exceptions import DinkContentTooLargeError, DinkTransportError

_logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class FetchedSource:
    """A downloaded source file.

    ``url`` is the final location after redirects; generated shims
    point there rather than at the requested specifier.
    """

    url: str
    text: str


class Fetcher(Protocol):
    """Structural fetch interface used by the linker.

    Tests pass in-memory doubles; production uses :class:`HttpFetcher`.
    """

    async def fetch(self, specifier: str) -> FetchedSource:
        ...


def _too_large(specifier: str, size: int, limit: int) -> DinkContentTooLargeError:
    return DinkContentTooLargeError(
        f"too big source file: {size} bytes from {specifier} (limit {limit})",
        content_length=size,
        limit=limit,
        specifier=specifier,
    )


class HttpFetcher:
    """GET remote files with a size ceiling and no retries."""

    def __init__(self, config: DinkConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def _read_limited(self, resp: aiohttp.ClientResponse, specifier: str) -> bytes:
        limit = self._config.max_content_length
        buf = bytearray()
        async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
            buf.extend(chunk)
            if len(buf) > limit:
                raise _too_large(specifier, len(buf), limit)
        return bytes(buf)

    async def fetch(self, specifier: str) -> FetchedSource:
        """Download *specifier* and return its final URL and text.

        The declared ``Content-Length`` is checked before any of the body
        is read; bodies without one are cut off once they pass the limit.
        """
        kwargs: dict[str, Any] = {"headers": {"user-agent": USER_AGENT}}
        if self._config.request_timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("GET %s", specifier)

        try:
            async with self._http.get(specifier, **kwargs) as resp:
                if resp.status != 200:
                    raise DinkTransportError(
                        f"failed to fetch {specifier}: HTTP {resp.status}",
                        status_code=resp.status,
                        specifier=specifier,
                    )
                declared = resp.content_length
                if declared is not None and declared > self._config.max_content_length:
                    raise _too_large(specifier, declared, self._config.max_content_length)
                body = await self._read_limited(resp, specifier)
                final_url = str(resp.url)
                charset = resp.charset or "utf-8"
        except DinkTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise DinkTransportError(
                f"failed to fetch {specifier}: {exc}",
                specifier=specifier,
            ) from exc

        try:
            text = body.decode(charset, errors="replace")
        except LookupError:
            text = body.decode("utf-8", errors="replace")
        return FetchedSource(url=final_url, text=text)
