"""
Message decryption contract.

The cipher itself lives outside this package. A decryptor turns one raw
message node into a DecryptionResult whose decrypt() must be awaited
before full_message holds the plaintext.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, Protocol

from pydantic import BaseModel

from wa_newsletter.models.node import BinaryNode


class Credentials(BaseModel):
    """Identity of the local account, as needed for decryption."""
    me_id: str
    me_lid: Optional[str] = None


class DecryptionResult:
    __slots__ = ("full_message", "_decrypt")

    def __init__(self, full_message: Any, decrypt: Callable[[], Awaitable[None]]):
        self.full_message = full_message
        self._decrypt = decrypt

    async def decrypt(self) -> None:
        await self._decrypt()

    def __repr__(self) -> str:
        return f"DecryptionResult(full_message={self.full_message!r})"


class MessageDecryptor(Protocol):
    def __call__(
        self,
        node: BinaryNode,
        me_id: str,
        me_lid: str,
        repository: Any,
        logger: logging.Logger,
    ) -> DecryptionResult:
        ...
