"""
Binary node navigation helpers.
"""

from typing import Optional

from wa_newsletter.models.node import BinaryNode

S_WHATSAPP_NET = "s.whatsapp.net"


def get_all_binary_node_children(node: Optional[BinaryNode]) -> list[BinaryNode]:
    if node is None or not isinstance(node.content, list):
        return []
    return [child for child in node.content if isinstance(child, BinaryNode)]


def get_binary_node_children(node: Optional[BinaryNode], tag: str) -> list[BinaryNode]:
    return [child for child in get_all_binary_node_children(node) if child.tag == tag]


def get_binary_node_child(node: Optional[BinaryNode], tag: str) -> Optional[BinaryNode]:
    for child in get_all_binary_node_children(node):
        if child.tag == tag:
            return child
    return None


def content_bytes(node: Optional[BinaryNode]) -> bytes:
    """Raw payload of a leaf node; empty for missing or nested content."""
    if node is None:
        return b""
    if isinstance(node.content, (bytes, bytearray)):
        return bytes(node.content)
    if isinstance(node.content, str):
        return node.content.encode("utf-8")
    return b""
