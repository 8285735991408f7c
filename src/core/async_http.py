"""Async HTTP fetching using httpx.

The fetcher never retries; a failed request surfaces as ``FetchError`` and the
caller decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Mapping, Optional
from urllib.parse import urlparse

import httpx

from config import settings
from services.errors import MissingParameterError

# Anything that turns a URL into page text; ``Fetcher`` in production, a stub in tests.
FetchFn = Callable[[str], Awaitable[str]]


class FetchError(RuntimeError):
    """Network or HTTP failure for a single URL."""

    def __init__(self, url: str, cause: BaseException | str):
        super().__init__(f"Failed to fetch {url}: {cause}")
        self.url = url
        self.cause = cause


@dataclass(frozen=True)
class FetchPolicy:
    timeout: float = settings.DEFAULT_TIMEOUT
    user_agent: str = settings.DEFAULT_USER_AGENT
    headers: Mapping[str, str] = field(default_factory=dict)

    def build_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, **self.headers}


def create_client(policy: Optional[FetchPolicy] = None, **kwargs) -> httpx.AsyncClient:
    """Construct the shared client; the caller owns its lifecycle."""
    policy = policy or FetchPolicy()
    return httpx.AsyncClient(
        headers=policy.build_headers(), timeout=policy.timeout, follow_redirects=True, **kwargs
    )


def _check_url(url: str) -> None:
    if not url or not url.strip():
        raise MissingParameterError("url")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FetchError(url, "not an absolute http(s) URL")


async def fetch(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    policy: Optional[FetchPolicy] = None,
) -> str:
    _check_url(url)
    close_client = False
    if client is None:
        client = create_client(policy)
        close_client = True
    try:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(url, e) from e
        return resp.text
    finally:
        if close_client:
            await client.aclose()


class Fetcher:
    """Binds ``fetch`` to one injected client so scrapers share connections."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def __call__(self, url: str) -> str:
        return await fetch(url, client=self._client)
