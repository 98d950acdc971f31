"""
Structured-query envelope construction and result parsing.

Outbound:  iq{id, type, to, xmlns} > query{query_id} > json({"variables": ...})
Inbound:   iq > result > json({"data": ..., "errors": [...]})
"""

import json
from typing import Any, Optional

from wa_newsletter.models.envelope import QueryRequest, ResultEnvelope
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import QueryKind
from wa_newsletter.transport.node import S_WHATSAPP_NET, content_bytes, get_binary_node_child


def encode_variables(variables: dict[str, Any]) -> bytes:
    return json.dumps({"variables": variables}, ensure_ascii=False).encode("utf-8")


def build_mex_query(request: QueryRequest, tag: str) -> BinaryNode:
    """Build a w:mex iq carrying one structured query."""
    return BinaryNode(
        tag="iq",
        attrs={"id": tag, "type": "get", "to": S_WHATSAPP_NET, "xmlns": "w:mex"},
        content=[
            BinaryNode(
                tag="query",
                attrs={"query_id": request.query_id},
                content=encode_variables(request.variables),
            )
        ],
    )


def build_newsletter_mex_query(
    jid: str,
    query_id: str,
    tag: str,
    content: Optional[dict[str, Any]] = None,
) -> BinaryNode:
    """w:mex query whose variables are scoped to one newsletter."""
    variables = {"newsletter_id": jid, **(content or {})}
    return build_mex_query(QueryRequest(query_id=query_id, variables=variables), tag)


def build_newsletter_query(
    jid: str,
    type: str,
    content: Optional[list[BinaryNode]],
    tag: str,
) -> BinaryNode:
    """Namespace-scoped `newsletter` iq addressed to `jid`."""
    return BinaryNode(
        tag="iq",
        attrs={"id": tag, "type": type, "xmlns": "newsletter", "to": jid},
        content=content,
    )


def build_query(kind: QueryKind, tag: str, **params: Any) -> BinaryNode:
    """Dispatch to the builder for one envelope variant."""
    if kind is QueryKind.MEX:
        return build_mex_query(QueryRequest(query_id=params["query_id"], variables=params.get("variables") or {}), tag)
    if kind is QueryKind.NEWSLETTER_MEX:
        return build_newsletter_mex_query(params["jid"], params["query_id"], tag, params.get("content"))
    if kind is QueryKind.NEWSLETTER:
        return build_newsletter_query(params["jid"], params["type"], params.get("content"), tag)
    raise ValueError(f"Unknown query kind: {kind!r}")


def result_payload(node: BinaryNode) -> Optional[bytes]:
    """Bytes of the `result` child, or None when absent or empty."""
    payload = content_bytes(get_binary_node_child(node, "result"))
    return payload or None


def parse_result_envelope(payload: bytes) -> ResultEnvelope:
    """Parse a `result` payload. Malformed JSON raises json.JSONDecodeError."""
    return ResultEnvelope.model_validate(json.loads(payload.decode("utf-8")))
