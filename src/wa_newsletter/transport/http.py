"""
HTTP client for media downloads (picture sources given as URLs).
"""

from typing import Optional

import httpx

from wa_newsletter.errors import TransportError

USER_AGENT = "wa-newsletter/0.1.0"


class MediaClient:
    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
        )

    async def get_bytes(self, url: str) -> bytes:
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        if resp.status_code >= 400:
            raise TransportError(f"HTTP {resp.status_code}: {resp.text[:200]}")
        return resp.content

    async def close(self) -> None:
        await self._client.aclose()
