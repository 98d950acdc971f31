"""Media helpers."""

import httpx
import pytest

from wa_newsletter.errors import TransportError
from wa_newsletter.media import generate_profile_picture, get_url_from_direct_path, load_picture_source
from wa_newsletter.transport.http import MediaClient


def _media_client(status: int = 200, body: bytes = b"\xff\xd8jpeg") -> MediaClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=body)
    return MediaClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_direct_path_to_url():
    assert get_url_from_direct_path("/v/t61/x.jpg") == "https://mmg.whatsapp.net/v/t61/x.jpg"
    assert get_url_from_direct_path("") == "https://mmg.whatsapp.net"
    assert get_url_from_direct_path("https://cdn.example/x.jpg") == "https://cdn.example/x.jpg"


@pytest.mark.asyncio
async def test_load_from_bytes_and_path(tmp_path):
    picture = tmp_path / "pic.jpg"
    picture.write_bytes(b"file-bytes")
    assert await load_picture_source(b"raw") == b"raw"
    assert await load_picture_source(picture) == b"file-bytes"
    assert await load_picture_source(str(picture)) == b"file-bytes"


@pytest.mark.asyncio
async def test_load_from_url():
    client = _media_client()
    assert await load_picture_source({"url": "https://cdn.example/pic.jpg"}, client) == b"\xff\xd8jpeg"
    await client.close()


@pytest.mark.asyncio
async def test_http_error_raises_transport_error():
    client = _media_client(status=404, body=b"missing")
    with pytest.raises(TransportError):
        await load_picture_source({"url": "https://cdn.example/pic.jpg"}, client)
    await client.close()


@pytest.mark.asyncio
async def test_url_mapping_requires_url():
    with pytest.raises(ValueError):
        await load_picture_source({})


@pytest.mark.asyncio
async def test_async_encoder():
    async def encoder(raw: bytes) -> bytes:
        return raw.upper()

    picture = await generate_profile_picture(b"abc", encoder)
    assert picture.img == b"ABC"
