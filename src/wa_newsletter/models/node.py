"""
Binary message-tree node as exchanged with the transport.
"""

from __future__ import annotations

from typing import Optional, Union
from pydantic import BaseModel


class BinaryNode(BaseModel):
    tag: str
    attrs: dict[str, str] = {}
    content: Optional[Union[list[BinaryNode], bytes, str]] = None
