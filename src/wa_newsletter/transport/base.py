"""
Transport contract consumed by the query and update layers.

Correlation, timeouts and retries belong to the transport; callers here
only build a request node and await the matching response node.
"""

from typing import Optional, Protocol

from wa_newsletter.models.node import BinaryNode


class Transport(Protocol):
    async def query(self, node: BinaryNode, timeout: Optional[float] = None) -> BinaryNode:
        ...

    def generate_message_tag(self) -> str:
        ...
