"""
AsyncNewsletterClient / NewsletterClient — main SDK clients.
"""

import asyncio
from typing import Any, Optional, Sequence

from wa_newsletter.autofollow import AUTO_FOLLOW_NEWSLETTERS, DEFAULT_AUTO_FOLLOW_DELAY_S, AutoFollowTask
from wa_newsletter.crypto import Credentials, MessageDecryptor
from wa_newsletter.errors import TransportError
from wa_newsletter.executor import QueryExecutor
from wa_newsletter.media import PictureEncoder, PictureSource
from wa_newsletter.models.metadata import MetadataRecord
from wa_newsletter.models.queries import DecryptFailurePolicy
from wa_newsletter.models.update import UpdateRecord
from wa_newsletter.newsletter import NewsletterAPI, Numeric
from wa_newsletter.transport.base import Transport
from wa_newsletter.transport.socketio import DEFAULT_QUERY_TIMEOUT, SocketIOTransport
from wa_newsletter.updates import UpdateParser

DEFAULT_BASE_URL = "https://web.whatsapp.com"


class AsyncNewsletterClient:
    """Async newsletter client (primary).

    Pass `transport` to run over an existing connection; otherwise connect()
    opens a SocketIOTransport to `base_url` with `token`.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        me_id: Optional[str] = None,
        me_lid: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[Transport] = None,
        decryptor: Optional[MessageDecryptor] = None,
        signal_repository: Any = None,
        decrypt_policy: DecryptFailurePolicy = DecryptFailurePolicy.ABORT,
        picture_encoder: Optional[PictureEncoder] = None,
        transports: Optional[list[str]] = None,
        ready_timeout: float = 15.0,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT,
        auto_follow: bool = True,
        auto_follow_targets: Sequence[str] = AUTO_FOLLOW_NEWSLETTERS,
        auto_follow_delay: float = DEFAULT_AUTO_FOLLOW_DELAY_S,
    ):
        self._base_url = base_url
        self._token = token
        self._transports = transports
        self._ready_timeout = ready_timeout
        self._query_timeout = query_timeout
        self._credentials = Credentials(me_id=me_id, me_lid=me_lid) if me_id else None
        self._decryptor = decryptor
        self._signal_repository = signal_repository
        self._decrypt_policy = decrypt_policy
        self._picture_encoder = picture_encoder
        self._auto_follow = auto_follow
        self._auto_follow_targets = tuple(auto_follow_targets)
        self._auto_follow_delay = auto_follow_delay

        self._transport: Optional[Transport] = transport
        self._owns_transport = transport is None
        self._newsletters: Optional[NewsletterAPI] = None
        self._auto_follow_task: Optional[AutoFollowTask] = None
        if transport is not None:
            self._build_api(transport)

    @property
    def can_decrypt(self) -> bool:
        """Whether INITIAL fetches can decrypt message bodies."""
        return self._decryptor is not None and self._credentials is not None

    @property
    def connected(self) -> bool:
        if self._newsletters is None:
            return False
        return getattr(self._transport, "connected", True)

    @property
    def newsletters(self) -> NewsletterAPI:
        self._ensure_connected()
        return self._newsletters  # type: ignore[return-value]

    def _build_api(self, transport: Transport) -> None:
        parser = UpdateParser(
            decryptor=self._decryptor,
            credentials=self._credentials,
            repository=self._signal_repository,
            policy=self._decrypt_policy,
        )
        executor = QueryExecutor(transport, timeout=self._query_timeout)
        self._newsletters = NewsletterAPI(executor, parser, self._picture_encoder)

    async def connect(self, token: Optional[str] = None) -> None:
        if self._transport is None:
            token = token or self._token
            if not token:
                raise TransportError("token required to open a connection.")
            transport = SocketIOTransport(
                base_url=self._base_url,
                token=token,
                transports=self._transports,
                ready_timeout=self._ready_timeout,
                query_timeout=self._query_timeout,
            )
            await transport.connect()
            self._transport = transport
            self._build_api(transport)

        if self._auto_follow and self._auto_follow_task is None:
            self._auto_follow_task = AutoFollowTask(
                self._newsletters.follow,  # type: ignore[union-attr]
                targets=self._auto_follow_targets,
                delay=self._auto_follow_delay,
            )
            self._auto_follow_task.start()

    async def disconnect(self) -> None:
        if self._auto_follow_task:
            await self._auto_follow_task.stop()
            self._auto_follow_task = None
        if self._owns_transport and isinstance(self._transport, SocketIOTransport):
            await self._transport.disconnect()
            self._transport = None
            self._newsletters = None

    async def fetch_all_subscribed(self) -> Any:
        return await self.newsletters.fetch_all_subscribed()

    async def subscribe_updates(self, jid: str) -> Optional[dict[str, str]]:
        return await self.newsletters.subscribe_updates(jid)

    async def follow(self, jid: str) -> None:
        await self.newsletters.follow(jid)

    async def unfollow(self, jid: str) -> None:
        await self.newsletters.unfollow(jid)

    async def mute(self, jid: str) -> None:
        await self.newsletters.mute(jid)

    async def unmute(self, jid: str) -> None:
        await self.newsletters.unmute(jid)

    async def update_name(self, jid: str, name: str) -> None:
        await self.newsletters.update_name(jid, name)

    async def update_description(self, jid: str, description: str) -> None:
        await self.newsletters.update_description(jid, description)

    async def update_picture(self, jid: str, content: PictureSource) -> None:
        await self.newsletters.update_picture(jid, content)

    async def remove_picture(self, jid: str) -> None:
        await self.newsletters.remove_picture(jid)

    async def metadata(self, type: str, key: str) -> MetadataRecord:
        return await self.newsletters.metadata(type, key)

    async def create(self, name: str, description: Optional[str] = None) -> MetadataRecord:
        return await self.newsletters.create(name, description)

    async def fetch_messages(
        self, type: str, key: str, count: Numeric, after: Optional[Numeric] = None,
    ) -> list[UpdateRecord]:
        return await self.newsletters.fetch_messages(type, key, count, after)

    async def fetch_updates(
        self, jid: str, count: Numeric, after: Optional[Numeric] = None, since: Optional[Numeric] = None,
    ) -> list[UpdateRecord]:
        return await self.newsletters.fetch_updates(jid, count, after, since)

    def _ensure_connected(self) -> None:
        if self._newsletters is None:
            raise TransportError("Not connected. Call connect() first.")


class NewsletterClient:
    """Sync wrapper around AsyncNewsletterClient. Runs the event loop internally.

    The loop only turns while a call is in progress, so the delayed
    auto-follow task is off unless `auto_follow=True` is passed.
    """

    def __init__(self, **kwargs: Any):
        kwargs.setdefault("auto_follow", False)
        self._loop = asyncio.new_event_loop()
        self._async = AsyncNewsletterClient(**kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def connected(self) -> bool:
        return self._async.connected

    def connect(self, **kwargs: Any) -> None:
        self._run(self._async.connect(**kwargs))

    def disconnect(self) -> None:
        self._run(self._async.disconnect())

    def fetch_all_subscribed(self) -> Any:
        return self._run(self._async.fetch_all_subscribed())

    def subscribe_updates(self, jid: str) -> Optional[dict[str, str]]:
        return self._run(self._async.subscribe_updates(jid))

    def follow(self, jid: str) -> None:
        self._run(self._async.follow(jid))

    def unfollow(self, jid: str) -> None:
        self._run(self._async.unfollow(jid))

    def mute(self, jid: str) -> None:
        self._run(self._async.mute(jid))

    def unmute(self, jid: str) -> None:
        self._run(self._async.unmute(jid))

    def update_name(self, jid: str, name: str) -> None:
        self._run(self._async.update_name(jid, name))

    def update_description(self, jid: str, description: str) -> None:
        self._run(self._async.update_description(jid, description))

    def update_picture(self, jid: str, content: PictureSource) -> None:
        self._run(self._async.update_picture(jid, content))

    def remove_picture(self, jid: str) -> None:
        self._run(self._async.remove_picture(jid))

    def metadata(self, type: str, key: str) -> MetadataRecord:
        return self._run(self._async.metadata(type, key))

    def create(self, name: str, description: Optional[str] = None) -> MetadataRecord:
        return self._run(self._async.create(name, description))

    def fetch_messages(self, type: str, key: str, count: Numeric, after: Optional[Numeric] = None) -> list[UpdateRecord]:
        return self._run(self._async.fetch_messages(type, key, count, after))

    def fetch_updates(
        self, jid: str, count: Numeric, after: Optional[Numeric] = None, since: Optional[Numeric] = None,
    ) -> list[UpdateRecord]:
        return self._run(self._async.fetch_updates(jid, count, after, since))
