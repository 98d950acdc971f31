"""
Integration tests against a live newsletter backend.

Requires environment variables:
  WA_NEWSLETTER_TOKEN     — transport auth token
  WA_NEWSLETTER_ME_ID     — own account jid
  WA_NEWSLETTER_JID       — a public newsletter jid to read
  WA_NEWSLETTER_BASE_URL  — (optional) transport base URL

Run: WA_NEWSLETTER_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from wa_newsletter import AsyncNewsletterClient, DecryptFailurePolicy
from wa_newsletter.client import DEFAULT_BASE_URL

SKIP = not os.environ.get("WA_NEWSLETTER_INTEGRATION")
TOKEN = os.environ.get("WA_NEWSLETTER_TOKEN", "")
ME_ID = os.environ.get("WA_NEWSLETTER_ME_ID", "")
JID = os.environ.get("WA_NEWSLETTER_JID", "")
BASE_URL = os.environ.get("WA_NEWSLETTER_BASE_URL", DEFAULT_BASE_URL)

pytestmark = pytest.mark.skipif(SKIP, reason="WA_NEWSLETTER_INTEGRATION not set")


def make_client() -> AsyncNewsletterClient:
    return AsyncNewsletterClient(
        token=TOKEN,
        me_id=ME_ID,
        base_url=BASE_URL,
        auto_follow=False,
        decrypt_policy=DecryptFailurePolicy.PARTIAL,
    )


class TestConnectionLifecycle:
    @pytest.mark.asyncio
    async def test_connects(self):
        client = make_client()
        await client.connect()
        assert client.connected
        await client.disconnect()

    @pytest.mark.asyncio
    async def test_rejects_invalid_token(self):
        client = AsyncNewsletterClient(token="invalid", base_url=BASE_URL, auto_follow=False)
        with pytest.raises(Exception):
            await client.connect()


class TestReads:
    @pytest.mark.asyncio
    async def test_metadata(self):
        client = make_client()
        await client.connect()
        try:
            record = await client.metadata("jid", JID)
            assert record.id == JID
            assert record.name
        finally:
            await client.disconnect()

    @pytest.mark.asyncio
    async def test_fetch_updates(self):
        client = make_client()
        await client.connect()
        try:
            records = await client.fetch_updates(JID, 5)
            assert len(records) <= 5
            assert all(r.views >= 0 for r in records)
        finally:
            await client.disconnect()

    @pytest.mark.asyncio
    async def test_fetch_all_subscribed(self):
        client = make_client()
        await client.connect()
        try:
            assert isinstance(await client.fetch_all_subscribed(), list)
        finally:
            await client.disconnect()
