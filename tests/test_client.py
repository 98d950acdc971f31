"""Client facade lifecycle over an injected transport."""

import asyncio

import pytest

from wa_newsletter import AsyncNewsletterClient, NewsletterClient
from wa_newsletter.errors import TransportError
from wa_newsletter.models.queries import QueryId
from wa_newsletter.transport.node import get_binary_node_child

from fakes import FakeTransport, message_node, result_node, updates_response

JID = "120363000000000000@newsletter"


@pytest.mark.asyncio
async def test_commands_require_connection():
    client = AsyncNewsletterClient(token="t")
    assert not client.connected
    with pytest.raises(TransportError):
        await client.follow(JID)


@pytest.mark.asyncio
async def test_connect_without_token_fails():
    with pytest.raises(TransportError):
        await AsyncNewsletterClient().connect()


@pytest.mark.asyncio
async def test_injected_transport_runs_commands(transport: FakeTransport):
    client = AsyncNewsletterClient(transport=transport, auto_follow=False)
    await client.connect()
    assert client.connected

    transport.respond_with(updates_response([message_node("1", reactions=[("4", "🔥")])]))
    records = await client.fetch_updates(JID, 1)
    assert records[0].reactions[0].count == 4
    await client.disconnect()


@pytest.mark.asyncio
async def test_auto_follow_runs_after_connect(transport: FakeTransport):
    client = AsyncNewsletterClient(transport=transport, auto_follow_targets=["a@newsletter"], auto_follow_delay=0)
    await client.connect()
    await asyncio.sleep(0.01)

    query = get_binary_node_child(transport.sent[0], "query")
    assert query.attrs["query_id"] == QueryId.FOLLOW
    await client.disconnect()


@pytest.mark.asyncio
async def test_auto_follow_failure_does_not_affect_commands(transport: FakeTransport):
    transport.respond_with(TransportError("closed"))
    client = AsyncNewsletterClient(transport=transport, auto_follow_targets=["a@newsletter"], auto_follow_delay=0)
    await client.connect()
    await asyncio.sleep(0.01)

    transport.respond_with(result_node({"data": {"xwa2_newsletter_subscribed": []}}))
    assert await client.fetch_all_subscribed() == []
    await client.disconnect()


@pytest.mark.asyncio
async def test_disconnect_cancels_pending_auto_follow(transport: FakeTransport):
    client = AsyncNewsletterClient(transport=transport, auto_follow_delay=60)
    await client.connect()
    await client.disconnect()
    await asyncio.sleep(0)
    assert transport.sent == []


def test_sync_wrapper(transport: FakeTransport):
    client = NewsletterClient(transport=transport, auto_follow=False)
    client.connect()
    transport.respond_with(result_node({"data": {"xwa2_newsletter": {"id": JID}}}))
    assert client.metadata("jid", JID).id == JID
    client.mute(JID)
    assert len(transport.sent) == 2
    client.disconnect()


def test_sync_wrapper_skips_auto_follow_by_default(transport: FakeTransport):
    client = NewsletterClient(transport=transport, auto_follow_delay=0)
    client.connect()
    assert client._async._auto_follow_task is None
    client.disconnect()
    assert transport.sent == []


def test_sync_wrapper_fetch_updates_window(transport: FakeTransport):
    client = NewsletterClient(transport=transport)
    client.connect()
    transport.respond_with(updates_response([message_node("7", views="3")]))

    records = client.fetch_updates(JID, 5, after=20, since=1700000000)

    assert [r.server_id for r in records] == ["7"]
    attrs = transport.sent[0].content[0].attrs
    assert attrs["after"] == "20"
    assert attrs["since"] == "1700000000"
    client.disconnect()


def test_can_decrypt_needs_decryptor_and_credentials():
    assert not AsyncNewsletterClient(token="t").can_decrypt
    assert not AsyncNewsletterClient(token="t", me_id="1@s.whatsapp.net").can_decrypt
    assert AsyncNewsletterClient(token="t", me_id="1@s.whatsapp.net", decryptor=lambda *a: None).can_decrypt
