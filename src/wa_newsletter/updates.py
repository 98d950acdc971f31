"""
Update parser — newsletter message/update fetch responses to UpdateRecords.

INITIAL fetches (`messages`) carry encrypted message bodies, which are
decrypted concurrently, one task per child. INCREMENTAL fetches
(`message_updates > messages`) only carry views and reactions.
"""

import asyncio
import inspect
import logging
from typing import Any, Optional

from wa_newsletter.coerce import coerce_int
from wa_newsletter.crypto import Credentials, MessageDecryptor
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import DecryptFailurePolicy, FetchMode
from wa_newsletter.models.update import ReactionRecord, UpdateRecord
from wa_newsletter.transport.node import (
    get_all_binary_node_children,
    get_binary_node_child,
    get_binary_node_children,
)

logger = logging.getLogger(__name__)


def messages_collection(node: BinaryNode, mode: FetchMode) -> Optional[BinaryNode]:
    if mode is FetchMode.INITIAL:
        return get_binary_node_child(node, "messages")
    return get_binary_node_child(get_binary_node_child(node, "message_updates"), "messages")


def parse_reactions(message_node: BinaryNode) -> list[ReactionRecord]:
    reactions = get_binary_node_child(message_node, "reactions")
    return [
        ReactionRecord(count=coerce_int("reaction_count", r.attrs.get("count")), code=r.attrs.get("code"))
        for r in get_binary_node_children(reactions, "reaction")
    ]


def parse_views(message_node: BinaryNode) -> int:
    views = get_binary_node_child(message_node, "views_count")
    return coerce_int("views", views.attrs.get("count") if views else None)


class UpdateParser:
    def __init__(
        self,
        decryptor: Optional[MessageDecryptor] = None,
        credentials: Optional[Credentials] = None,
        repository: Any = None,
        policy: DecryptFailurePolicy = DecryptFailurePolicy.ABORT,
    ):
        self._decryptor = decryptor
        self._credentials = credentials
        self._repository = repository
        self._policy = policy

    async def parse(self, node: BinaryNode, mode: FetchMode) -> list[UpdateRecord]:
        """Build one UpdateRecord per child of the mode's `messages` node.

        Records come back in document order. Under the ABORT policy one
        failed decryption cancels the remaining tasks and propagates.
        """
        collection = messages_collection(node, mode)
        origin = collection.attrs.get("jid") if collection is not None else None
        children = get_all_binary_node_children(collection)
        if not children:
            return []

        tasks = [asyncio.ensure_future(self._parse_one(child, mode, origin)) for child in children]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def _parse_one(self, message_node: BinaryNode, mode: FetchMode, origin: Optional[str]) -> UpdateRecord:
        record = UpdateRecord(
            server_id=message_node.attrs.get("server_id"),
            views=parse_views(message_node),
            reactions=parse_reactions(message_node),
        )
        if mode is not FetchMode.INITIAL:
            return record

        attrs = dict(message_node.attrs)
        if origin is not None:
            attrs["from"] = origin
        try:
            record.message = await self._decrypt(message_node.model_copy(update={"attrs": attrs}))
        except Exception as e:
            if self._policy is DecryptFailurePolicy.ABORT:
                raise
            logger.warning("Decrypt failed for newsletter message %s: %s", record.server_id, e)
            record.error = str(e) or type(e).__name__
        return record

    async def _decrypt(self, message_node: BinaryNode) -> Any:
        if self._decryptor is None or self._credentials is None:
            raise RuntimeError("Message decryption requires a decryptor and credentials")
        result = self._decryptor(
            message_node,
            self._credentials.me_id,
            self._credentials.me_lid or "",
            self._repository,
            logger,
        )
        if inspect.isawaitable(result):
            result = await result
        await result.decrypt()
        return result.full_message


async def parse_fetched_updates(
    node: BinaryNode,
    mode: FetchMode,
    decryptor: Optional[MessageDecryptor] = None,
    credentials: Optional[Credentials] = None,
    repository: Any = None,
    policy: DecryptFailurePolicy = DecryptFailurePolicy.ABORT,
) -> list[UpdateRecord]:
    parser = UpdateParser(decryptor, credentials, repository, policy)
    return await parser.parse(node, mode)
