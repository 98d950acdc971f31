"""
Media helpers — direct-path URLs and profile picture sources.
"""

from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel

from wa_newsletter.transport.http import MediaClient

MEDIA_HOST = "mmg.whatsapp.net"

PictureSource = Union[bytes, str, Path, dict[str, Any]]
PictureEncoder = Callable[[bytes], Union[bytes, Awaitable[bytes]]]


class ProfilePicture(BaseModel):
    img: bytes


def get_url_from_direct_path(direct_path: str) -> str:
    if direct_path.startswith("https://") or direct_path.startswith("http://"):
        return direct_path
    return f"https://{MEDIA_HOST}{direct_path}"


async def load_picture_source(content: PictureSource, http: Optional[MediaClient] = None) -> bytes:
    """Read picture bytes from raw bytes, a file path or a {"url": ...} mapping."""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if isinstance(content, dict):
        url = content.get("url")
        if not url:
            raise ValueError("Picture source mapping requires a 'url'")
        client = http or MediaClient()
        try:
            return await client.get_bytes(str(url))
        finally:
            if http is None:
                await client.close()
    return Path(content).read_bytes()


async def generate_profile_picture(
    content: PictureSource,
    encoder: Optional[PictureEncoder] = None,
    http: Optional[MediaClient] = None,
) -> ProfilePicture:
    """Load a picture and hand it to `encoder` (resize/re-encode lives there)."""
    raw = await load_picture_source(content, http)
    if encoder is None:
        return ProfilePicture(img=raw)
    encoded = encoder(raw)
    if not isinstance(encoded, (bytes, bytearray)):
        encoded = await encoded
    return ProfilePicture(img=bytes(encoded))
