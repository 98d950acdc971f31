"""
Socket.IO transport for binary nodes.

Connection: {base_url}/socket.io/ with auth={token}. Waits for the `ready`
event before connect() returns. Nodes travel as `node` events carrying the
node's dict form; responses are correlated by their `id` attribute.
"""

import asyncio
import logging
import secrets
from typing import Any, Callable, Optional

import socketio

from wa_newsletter.errors import TransportError
from wa_newsletter.models.node import BinaryNode

SOCKETIO_PATH = "/socket.io/"
NODE_EVENT = "node"
DEFAULT_QUERY_TIMEOUT = 60.0

logger = logging.getLogger(__name__)


class SocketIOTransport:
    def __init__(
        self,
        base_url: str,
        token: str,
        transports: Optional[list[str]] = None,
        ready_timeout: float = 15.0,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT,
    ):
        self._base_url = base_url
        self._token = token
        self._transports = transports or ["websocket"]
        self._ready_timeout = ready_timeout
        self._query_timeout = query_timeout
        self._sio: Optional[socketio.AsyncClient] = None
        self._connected = False
        self._pending: dict[str, asyncio.Future[BinaryNode]] = {}
        self._node_handlers: list[Callable[[BinaryNode], None]] = []
        self._tag_prefix = f"{secrets.randbelow(10_000)}.{secrets.randbelow(10_000)}-"
        self._epoch = 1

    @property
    def connected(self) -> bool:
        return self._connected and self._sio is not None and self._sio.connected

    def generate_message_tag(self) -> str:
        tag = f"{self._tag_prefix}{self._epoch}"
        self._epoch += 1
        return tag

    def add_node_handler(self, handler: Callable[[BinaryNode], None]) -> Callable[[], None]:
        """Receive nodes that do not answer a pending query. Returns a cleanup function."""
        self._node_handlers.append(handler)
        def remove() -> None:
            try:
                self._node_handlers.remove(handler)
            except ValueError:
                pass
        return remove

    async def connect(self) -> None:
        if self._sio and self._sio.connected:
            return

        self._sio = socketio.AsyncClient()
        ready_event = asyncio.Event()

        @self._sio.on("ready")
        async def on_ready(*_args: Any) -> None:
            self._connected = True
            ready_event.set()

        @self._sio.on(NODE_EVENT)
        async def on_node(data: Any) -> None:
            self._dispatch(data)

        @self._sio.event
        async def disconnect(_reason: str = "") -> None:
            self._connected = False
            self._fail_pending(TransportError("Connection closed"))

        await self._sio.connect(
            self._base_url,
            auth={"token": self._token},
            transports=self._transports,
            socketio_path=SOCKETIO_PATH,
        )

        try:
            await asyncio.wait_for(ready_event.wait(), timeout=self._ready_timeout)
        except asyncio.TimeoutError:
            await self._sio.disconnect()
            raise TransportError(f"Timed out waiting for 'ready' event after {self._ready_timeout}s")

    def _dispatch(self, data: Any) -> None:
        if not isinstance(data, dict):
            return
        try:
            node = BinaryNode.model_validate(data)
        except ValueError as e:
            logger.warning(f"Dropping malformed node: {e}")
            return
        waiter = self._pending.pop(node.attrs.get("id", ""), None)
        if waiter is not None:
            if not waiter.done():
                waiter.set_result(node)
            return
        for handler in list(self._node_handlers):
            handler(node)

    def _fail_pending(self, error: Exception) -> None:
        pending, self._pending = self._pending, {}
        for waiter in pending.values():
            if not waiter.done():
                waiter.set_exception(error)

    async def send_node(self, node: BinaryNode) -> None:
        if not self._sio or not self._sio.connected:
            raise TransportError("Socket.IO not connected")
        await self._sio.emit(NODE_EVENT, node.model_dump())

    async def query(self, node: BinaryNode, timeout: Optional[float] = None) -> BinaryNode:
        """Send a node and wait for the response carrying the same `id`."""
        tag = node.attrs.get("id")
        if not tag:
            tag = self.generate_message_tag()
            node = node.model_copy(update={"attrs": {**node.attrs, "id": tag}})

        waiter: asyncio.Future[BinaryNode] = asyncio.get_running_loop().create_future()
        self._pending[tag] = waiter
        try:
            await self.send_node(node)
            return await asyncio.wait_for(waiter, timeout=timeout or self._query_timeout)
        except asyncio.TimeoutError:
            logger.error(f"Query {tag} timed out")
            raise TransportError(f"Timeout waiting for response to {tag}")
        finally:
            self._pending.pop(tag, None)

    async def disconnect(self) -> None:
        self._connected = False
        self._fail_pending(TransportError("Connection closed"))
        if self._sio:
            await self._sio.disconnect()
            self._sio = None
