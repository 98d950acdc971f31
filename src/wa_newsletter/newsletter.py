"""
Newsletter commands — named actions over the query executor and the
update/metadata parsers.
"""

from __future__ import annotations

import base64
from typing import Any, Optional, Union

from wa_newsletter.coerce import to_wire
from wa_newsletter.executor import QueryExecutor
from wa_newsletter.media import PictureEncoder, PictureSource, generate_profile_picture
from wa_newsletter.metadata import extract_newsletter_metadata
from wa_newsletter.models.metadata import MetadataRecord
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import FetchMode, QueryId, QueryKind, XWAPath
from wa_newsletter.models.update import UpdateRecord
from wa_newsletter.transport.envelope import build_query
from wa_newsletter.transport.http import MediaClient
from wa_newsletter.transport.node import S_WHATSAPP_NET, get_binary_node_child
from wa_newsletter.updates import UpdateParser

Numeric = Union[int, str]

DEFAULT_AFTER = "100"
DEFAULT_SINCE = "0"


def _wire_or(value: Optional[Numeric], default: str) -> str:
    return to_wire(value) if value is not None and value != "" else default


class NewsletterAPI:
    def __init__(
        self,
        executor: QueryExecutor,
        parser: UpdateParser,
        picture_encoder: Optional[PictureEncoder] = None,
        media: Optional[MediaClient] = None,
    ):
        self._executor = executor
        self._parser = parser
        self._picture_encoder = picture_encoder
        self._media = media

    async def _send(self, kind: QueryKind, **params: Any) -> BinaryNode:
        return await self._executor.query(build_query(kind, self._executor.next_tag(), **params))

    async def _newsletter_query(self, jid: str, type: str, content: list[BinaryNode]) -> BinaryNode:
        return await self._send(QueryKind.NEWSLETTER, jid=jid, type=type, content=content)

    async def _newsletter_mex_query(
        self, jid: str, query_id: str, content: Optional[dict[str, Any]] = None,
    ) -> BinaryNode:
        return await self._send(QueryKind.NEWSLETTER_MEX, jid=jid, query_id=query_id, content=content)

    async def fetch_all_subscribed(self) -> Any:
        """All newsletters the account follows."""
        return await self._executor.execute({}, QueryId.SUBSCRIBED, XWAPath.SUBSCRIBED)

    async def subscribe_updates(self, jid: str) -> Optional[dict[str, str]]:
        """Subscribe to live updates. Returns the `live_updates` attrs (e.g. duration)."""
        result = await self._newsletter_query(jid, "set", [BinaryNode(tag="live_updates", attrs={}, content=[])])
        live = get_binary_node_child(result, "live_updates")
        return live.attrs if live else None

    async def follow(self, jid: str) -> None:
        await self._newsletter_mex_query(jid, QueryId.FOLLOW)

    async def unfollow(self, jid: str) -> None:
        await self._newsletter_mex_query(jid, QueryId.UNFOLLOW)

    async def mute(self, jid: str) -> None:
        await self._newsletter_mex_query(jid, QueryId.MUTE)

    async def unmute(self, jid: str) -> None:
        await self._newsletter_mex_query(jid, QueryId.UNMUTE)

    async def _update(self, jid: str, **updates: Any) -> None:
        await self._newsletter_mex_query(jid, QueryId.JOB_MUTATION, {"updates": {**updates, "settings": None}})

    async def update_name(self, jid: str, name: str) -> None:
        await self._update(jid, name=name)

    async def update_description(self, jid: str, description: str) -> None:
        await self._update(jid, description=description)

    async def update_picture(self, jid: str, content: PictureSource) -> None:
        picture = await generate_profile_picture(content, self._picture_encoder, self._media)
        await self._update(jid, picture=base64.b64encode(picture.img).decode("ascii"))

    async def remove_picture(self, jid: str) -> None:
        await self._update(jid, picture="")

    async def metadata(self, type: str, key: str) -> MetadataRecord:
        """Fetch metadata by `jid` or `invite` key."""
        variables = {
            "input": {
                "key": key,
                "type": type.upper(),
                "view_role": "GUEST" if type == "jid" else None,
            },
            "fetch_viewer_metadata": True,
            "fetch_full_image": True,
            "fetch_creation_time": True,
        }
        return await self._metadata_query(QueryId.METADATA, variables, is_create=False)

    async def create(self, name: str, description: Optional[str] = None) -> MetadataRecord:
        variables = {"input": {"name": name, "description": description, "settings": None}}
        return await self._metadata_query(QueryId.CREATE, variables, is_create=True)

    async def _metadata_query(self, query_id: str, variables: dict[str, Any], is_create: bool) -> MetadataRecord:
        result = await self._send(QueryKind.MEX, query_id=query_id, variables=variables)
        return extract_newsletter_metadata(result, is_create)

    async def fetch_messages(
        self, type: str, key: str, count: Numeric, after: Optional[Numeric] = None,
    ) -> list[UpdateRecord]:
        """Fetch and decrypt messages of a newsletter addressed by `jid` or `invite` key."""
        attrs = {
            "type": type,
            **({"key": key} if type == "invite" else {"jid": key}),
            "count": to_wire(count),
            "after": _wire_or(after, DEFAULT_AFTER),
        }
        result = await self._newsletter_query(S_WHATSAPP_NET, "get", [BinaryNode(tag="messages", attrs=attrs)])
        return await self._parser.parse(result, FetchMode.INITIAL)

    async def fetch_updates(
        self, jid: str, count: Numeric, after: Optional[Numeric] = None, since: Optional[Numeric] = None,
    ) -> list[UpdateRecord]:
        """View/reaction deltas since `since`."""
        attrs = {
            "count": to_wire(count),
            "after": _wire_or(after, DEFAULT_AFTER),
            "since": _wire_or(since, DEFAULT_SINCE),
        }
        result = await self._newsletter_query(jid, "get", [BinaryNode(tag="message_updates", attrs=attrs)])
        return await self._parser.parse(result, FetchMode.INCREMENTAL)
