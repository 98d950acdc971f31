"""Outbound envelope construction."""

import json

import pytest

from wa_newsletter.models.envelope import QueryRequest
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import QueryKind
from wa_newsletter.transport.envelope import (
    build_mex_query,
    build_newsletter_mex_query,
    build_newsletter_query,
    build_query,
    parse_result_envelope,
    result_payload,
)
from wa_newsletter.transport.node import get_binary_node_child

from fakes import result_node


def _variables(node: BinaryNode) -> dict:
    query = get_binary_node_child(node, "query")
    assert query is not None
    return json.loads(query.content.decode("utf-8"))


class TestMexQuery:
    def test_envelope_attrs(self):
        node = build_mex_query(QueryRequest(query_id="42", variables={"a": 1}), "tag-1")
        assert node.tag == "iq"
        assert node.attrs == {"id": "tag-1", "type": "get", "to": "s.whatsapp.net", "xmlns": "w:mex"}
        query = get_binary_node_child(node, "query")
        assert query.attrs == {"query_id": "42"}
        assert isinstance(query.content, bytes)

    def test_variables_are_wrapped_utf8_json(self):
        node = build_mex_query(QueryRequest(query_id="42", variables={"name": "Café ☕"}), "t")
        assert _variables(node) == {"variables": {"name": "Café ☕"}}

    def test_request_is_immutable(self):
        request = QueryRequest(query_id="42")
        with pytest.raises(Exception):
            request.query_id = "43"


class TestNewsletterQueries:
    def test_newsletter_mex_merges_newsletter_id(self):
        node = build_newsletter_mex_query("1@newsletter", "99", "t", {"updates": {"name": "N", "settings": None}})
        assert _variables(node) == {
            "variables": {"newsletter_id": "1@newsletter", "updates": {"name": "N", "settings": None}},
        }

    def test_newsletter_mex_without_content(self):
        node = build_newsletter_mex_query("1@newsletter", "99", "t")
        assert _variables(node) == {"variables": {"newsletter_id": "1@newsletter"}}

    def test_newsletter_query_is_namespace_scoped(self):
        child = BinaryNode(tag="live_updates", content=[])
        node = build_newsletter_query("1@newsletter", "set", [child], "t")
        assert node.attrs == {"id": "t", "type": "set", "xmlns": "newsletter", "to": "1@newsletter"}
        assert node.content == [child]

    def test_build_query_dispatches_on_kind(self):
        mex = build_query(QueryKind.MEX, "t", query_id="1", variables={"x": 1})
        scoped = build_query(QueryKind.NEWSLETTER_MEX, "t", jid="j@newsletter", query_id="1")
        plain = build_query(QueryKind.NEWSLETTER, "t", jid="j@newsletter", type="get", content=[])
        assert mex.attrs["xmlns"] == "w:mex"
        assert _variables(scoped)["variables"]["newsletter_id"] == "j@newsletter"
        assert plain.attrs["xmlns"] == "newsletter"


class TestResultParsing:
    def test_missing_result_is_none(self):
        assert result_payload(BinaryNode(tag="iq")) is None

    def test_empty_result_is_none(self):
        assert result_payload(result_node(b"")) is None

    def test_parse_envelope(self):
        envelope = parse_result_envelope(b'{"data": {"k": 1}}')
        assert envelope.data == {"k": 1}
        assert envelope.errors is None

    def test_malformed_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_result_envelope(b"{not json")
