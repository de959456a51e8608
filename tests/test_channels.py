from __future__ import annotations

from zeroclaw.channels import (
    CHANNEL_CONFIG_TYPES,
    DEFAULT_WEBHOOK_PORT,
    ChannelChoice,
    ChannelsConfig,
    IMessageConfig,
    NostrConfig,
    TelegramConfig,
    WebhookConfig,
    build_channel_config,
    parse_list_csv,
)


def test_choice_order_matches_menu() -> None:
    assert ChannelChoice.from_index(0) == ChannelChoice.CLI_ONLY
    assert ChannelChoice.from_index(1) == ChannelChoice.TELEGRAM
    assert ChannelChoice.from_index(10) == ChannelChoice.WEBHOOK
    assert ChannelChoice.from_index(16) == ChannelChoice.NOSTR
    assert ChannelChoice.from_index(99) == ChannelChoice.CLI_ONLY


def test_parse_list_csv() -> None:
    assert parse_list_csv(" a, b ,,c ") == ["a", "b", "c"]
    assert parse_list_csv("") == []


def test_telegram_token_required() -> None:
    config = build_channel_config(ChannelChoice.TELEGRAM, "abc123", "")
    assert config == TelegramConfig(bot_token="abc123", allowed_users=[])
    assert build_channel_config(ChannelChoice.TELEGRAM, "", "alice") is None
    assert build_channel_config(ChannelChoice.DISCORD, "", "") is None
    assert build_channel_config(ChannelChoice.SLACK, "", "") is None


def test_webhook_port_falls_back() -> None:
    assert build_channel_config(ChannelChoice.WEBHOOK, "9000", "s3cret") == WebhookConfig(port=9000, secret="s3cret")
    assert build_channel_config(ChannelChoice.WEBHOOK, "", "").port == DEFAULT_WEBHOOK_PORT
    assert build_channel_config(ChannelChoice.WEBHOOK, "99999", "").port == DEFAULT_WEBHOOK_PORT
    assert build_channel_config(ChannelChoice.WEBHOOK, "not-a-port", "").secret is None


def test_imessage_contacts_come_from_aux_field() -> None:
    config = build_channel_config(ChannelChoice.IMESSAGE, "ignored", "+15550001, me@example.com")
    assert config == IMessageConfig(allowed_contacts=["+15550001", "me@example.com"])


def test_nostr_allows_everyone_by_default() -> None:
    assert build_channel_config(ChannelChoice.NOSTR, "nsec1", "").allowed_pubkeys == ["*"]
    config = build_channel_config(ChannelChoice.NOSTR, "nsec1", "npub1,npub2")
    assert isinstance(config, NostrConfig)
    assert config.allowed_pubkeys == ["npub1", "npub2"]


def test_every_channel_builds_its_own_type() -> None:
    for choice, config_type in CHANNEL_CONFIG_TYPES.items():
        config = build_channel_config(choice, "primary", "aux")
        assert isinstance(config, config_type), choice
    assert build_channel_config(ChannelChoice.CLI_ONLY, "primary", "aux") is None


def test_channels_config_document() -> None:
    channels = ChannelsConfig.from_selection(build_channel_config(ChannelChoice.TELEGRAM, "abc123", "alice"))
    payload = channels.to_dict()
    assert payload["cli"] is True
    assert payload["telegram"]["bot_token"] == "abc123"
    assert payload["discord"] is None
    assert set(payload) == {"cli", *(choice.value for choice in CHANNEL_CONFIG_TYPES)}
    assert ChannelsConfig.from_dict(payload) == channels


def test_webhook_is_not_autostarted() -> None:
    channels = ChannelsConfig.from_selection(WebhookConfig())
    assert channels.channels() == [ChannelChoice.WEBHOOK]
    assert channels.channels_except_webhook() == []


def test_webhook_port_needs_plain_digits() -> None:
    for raw in ("+80", " 80", "8_0", "-1", "٨٠"):
        assert build_channel_config(ChannelChoice.WEBHOOK, raw, "").port == DEFAULT_WEBHOOK_PORT, raw
    assert build_channel_config(ChannelChoice.WEBHOOK, "0", "").port == 0
    assert build_channel_config(ChannelChoice.WEBHOOK, "65535", "").port == 65535
