"""
Structured-query executor — send, await, unwrap, normalize errors.

Every command that issues a w:mex query goes through execute(), so callers
see one error type (QueryError) whatever query they ran.
"""

import logging
from typing import Any, Optional

from wa_newsletter.errors import QueryError
from wa_newsletter.models.envelope import ResultEnvelope
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import QueryKind
from wa_newsletter.transport.base import Transport
from wa_newsletter.transport.envelope import build_query, parse_result_envelope, result_payload

logger = logging.getLogger(__name__)

_MISSING = object()


def unwrap_result(response: BinaryNode, data_path: Optional[str] = None) -> Any:
    """Return the requested data slice of a w:mex response or raise QueryError."""
    payload = result_payload(response)
    if payload is not None:
        envelope = parse_result_envelope(payload)
        if envelope.errors:
            first = envelope.errors[0]
            messages = ", ".join(e.message or "" for e in envelope.errors)
            raise QueryError(f"GraphQL error: {messages}", code=first.code, data=first.model_dump())

        value = _select(envelope, data_path)
        if value is not _MISSING:
            return value

    action = (data_path or "").replace("_", " ")
    raise QueryError(f"Failed to {action}", code=400, data=response.model_dump())


def _select(envelope: ResultEnvelope, data_path: Optional[str]) -> Any:
    # JSON null is a defined value; only absent keys count as missing
    if "data" not in envelope.model_fields_set:
        return _MISSING
    if not data_path:
        return envelope.data
    if not isinstance(envelope.data, dict):
        return _MISSING
    return envelope.data.get(data_path, _MISSING)


class QueryExecutor:
    def __init__(self, transport: Transport, timeout: Optional[float] = None):
        self._transport = transport
        self._timeout = timeout

    async def query(self, node: BinaryNode) -> BinaryNode:
        """Send a prebuilt node and await its correlated response."""
        return await self._transport.query(node, timeout=self._timeout)

    def next_tag(self) -> str:
        return self._transport.generate_message_tag()

    async def execute(
        self,
        variables: dict[str, Any],
        query_id: str,
        data_path: Optional[str] = None,
    ) -> Any:
        node = build_query(QueryKind.MEX, self.next_tag(), query_id=query_id, variables=variables)
        response = await self.query(node)
        try:
            return unwrap_result(response, data_path)
        except QueryError as e:
            logger.debug("Query %s failed (%s): %s", query_id, e.code, e)
            raise
