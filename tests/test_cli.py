"""CLI commands against a fake transport."""

import json

import pytest
from click.testing import CliRunner

from wa_newsletter.client import AsyncNewsletterClient
from wa_newsletter.cli.main import main
from wa_newsletter.models.queries import DecryptFailurePolicy

from fakes import FakeTransport, message_node, messages_response, result_node, updates_response


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr("wa_newsletter.cli.main.CONFIG_FILE", path)
    return path


@pytest.fixture
def fake_client(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr(
        "wa_newsletter.cli.main._get_client",
        lambda: AsyncNewsletterClient(transport=transport, auto_follow=False),
    )
    return transport


def test_config_set_and_show(config_file):
    runner = CliRunner()
    result = runner.invoke(main, ["config", "set", "--token", "secret", "--me-id", "1@s.whatsapp.net"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {"token": "secret", "me_id": "1@s.whatsapp.net"}

    result = runner.invoke(main, ["config", "show"])
    assert "secret" not in result.output
    assert "1@s.whatsapp.net" in result.output


def test_commands_require_settings(config_file):
    result = CliRunner().invoke(main, ["subscribed"])
    assert result.exit_code == 1


def test_updates_json(fake_client: FakeTransport):
    fake_client.respond_with(updates_response([message_node("5", views="12", reactions=[("3", "❤")])]))
    result = CliRunner().invoke(main, ["updates", "1@newsletter", "--json"])

    assert result.exit_code == 0, result.output
    records = json.loads(result.output)
    assert records == [{"server_id": "5", "views": 12, "reactions": [{"count": 3, "code": "❤"}], "error": None}]


def test_metadata_json(fake_client: FakeTransport):
    fake_client.respond_with(result_node({"data": {"xwa2_newsletter": {"id": "1@newsletter"}}}))
    result = CliRunner().invoke(main, ["metadata", "1@newsletter", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["id"] == "1@newsletter"


def test_follow(fake_client: FakeTransport):
    result = CliRunner().invoke(main, ["follow", "1@newsletter"])
    assert result.exit_code == 0, result.output
    assert "Following 1@newsletter" in result.output
    assert len(fake_client.sent) == 1


@pytest.fixture
def partial_client(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr(
        "wa_newsletter.cli.main._get_client",
        lambda: AsyncNewsletterClient(
            transport=transport, decrypt_policy=DecryptFailurePolicy.PARTIAL, auto_follow=False,
        ),
    )
    return transport


def test_messages_without_decryptor_hides_status(partial_client: FakeTransport):
    partial_client.respond_with(messages_response([message_node("9", views="4")]))
    result = CliRunner().invoke(main, ["messages", "1@newsletter", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"server_id": "9", "views": 4, "reactions": []}]


def test_messages_table_without_decryptor(partial_client: FakeTransport):
    partial_client.respond_with(messages_response([message_node("9", views="4")]))
    result = CliRunner().invoke(main, ["messages", "1@newsletter"])

    assert result.exit_code == 0, result.output
    assert "Status" not in result.output
    assert "decryptor" not in result.output


def test_messages_help_mentions_decryption():
    result = CliRunner().invoke(main, ["messages", "--help"])
    assert "decryptor" in result.output
