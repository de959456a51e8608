"""Channel choices and per-channel config shapes."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Union

DEFAULT_WEBHOOK_PORT = 8081
DEFAULT_MATRIX_HOMESERVER = "https://matrix.org"
DEFAULT_MATRIX_ROOM = "!zeroclaw:matrix.org"
DEFAULT_SIGNAL_HTTP_URL = "http://127.0.0.1:8686"
DEFAULT_LINQ_FROM_PHONE = "+10000000000"
DEFAULT_IRC_SERVER = "irc.libera.chat"
DEFAULT_IRC_PORT = 6697
DEFAULT_IRC_NICKNAME = "zeroclaw"
DEFAULT_WHATSAPP_VERIFY_TOKEN = "zeroclaw"
DEFAULT_NOSTR_RELAYS = [
    "wss://relay.damus.io",
    "wss://nos.lol",
    "wss://relay.primal.net",
    "wss://relay.snort.social",
]


class ChannelChoice(str, Enum):
    CLI_ONLY = "cli"
    TELEGRAM = "telegram"
    DISCORD = "discord"
    SLACK = "slack"
    IMESSAGE = "imessage"
    MATRIX = "matrix"
    SIGNAL = "signal"
    WHATSAPP = "whatsapp"
    LINQ = "linq"
    IRC = "irc"
    WEBHOOK = "webhook"
    NEXTCLOUD_TALK = "nextcloud_talk"
    DINGTALK = "dingtalk"
    QQ_OFFICIAL = "qq"
    LARK = "lark"
    FEISHU = "feishu"
    NOSTR = "nostr"

    @classmethod
    def from_index(cls, index: int) -> "ChannelChoice":
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return cls.CLI_ONLY

    @property
    def label(self) -> str:
        return CHANNEL_LABELS[self]


CHANNEL_LABELS: dict[ChannelChoice, str] = {
    ChannelChoice.CLI_ONLY: "CLI only (default)",
    ChannelChoice.TELEGRAM: "Telegram",
    ChannelChoice.DISCORD: "Discord",
    ChannelChoice.SLACK: "Slack",
    ChannelChoice.IMESSAGE: "iMessage",
    ChannelChoice.MATRIX: "Matrix",
    ChannelChoice.SIGNAL: "Signal",
    ChannelChoice.WHATSAPP: "WhatsApp",
    ChannelChoice.LINQ: "Linq",
    ChannelChoice.IRC: "IRC",
    ChannelChoice.WEBHOOK: "Webhook",
    ChannelChoice.NEXTCLOUD_TALK: "Nextcloud Talk",
    ChannelChoice.DINGTALK: "DingTalk",
    ChannelChoice.QQ_OFFICIAL: "QQ Official",
    ChannelChoice.LARK: "Lark",
    ChannelChoice.FEISHU: "Feishu",
    ChannelChoice.NOSTR: "Nostr",
}

# (primary prompt, auxiliary prompt) shown on the two channel entry steps.
CHANNEL_FIELD_PROMPTS: dict[ChannelChoice, tuple[str, str]] = {
    ChannelChoice.TELEGRAM: ("Bot token", "Allowed users (comma separated, blank for none)"),
    ChannelChoice.DISCORD: ("Bot token", "Allowed users (comma separated, blank for none)"),
    ChannelChoice.SLACK: ("Bot token", "Allowed users (comma separated, blank for none)"),
    ChannelChoice.IMESSAGE: ("Not used for iMessage, press Enter", "Allowed contacts (comma separated)"),
    ChannelChoice.MATRIX: ("Access token", f"Homeserver (blank for {DEFAULT_MATRIX_HOMESERVER})"),
    ChannelChoice.SIGNAL: ("Account (phone number)", "Group id (optional)"),
    ChannelChoice.WHATSAPP: ("Access token (optional)", "Phone number id (optional)"),
    ChannelChoice.LINQ: ("API token", "From phone"),
    ChannelChoice.IRC: (f"Server (blank for {DEFAULT_IRC_SERVER})", f"Nickname (blank for {DEFAULT_IRC_NICKNAME})"),
    ChannelChoice.WEBHOOK: (f"Port (blank for {DEFAULT_WEBHOOK_PORT})", "Shared secret (optional)"),
    ChannelChoice.NEXTCLOUD_TALK: ("Base URL", "App token"),
    ChannelChoice.DINGTALK: ("Client id", "Client secret"),
    ChannelChoice.QQ_OFFICIAL: ("App id", "App secret"),
    ChannelChoice.LARK: ("App id", "App secret"),
    ChannelChoice.FEISHU: ("App id", "App secret"),
    ChannelChoice.NOSTR: ("Private key", "Allowed pubkeys (comma separated, blank for any)"),
}


def _allow_all() -> list[str]:
    return ["*"]


@dataclass(frozen=True)
class TelegramConfig:
    bot_token: str
    allowed_users: list[str] = field(default_factory=list)
    stream_mode: str = "off"
    draft_update_interval_ms: int = 1000
    interrupt_on_new_message: bool = False
    mention_only: bool = False


@dataclass(frozen=True)
class DiscordConfig:
    bot_token: str
    guild_id: str | None = None
    allowed_users: list[str] = field(default_factory=list)
    listen_to_bots: bool = False
    mention_only: bool = False


@dataclass(frozen=True)
class SlackConfig:
    bot_token: str
    app_token: str | None = None
    channel_id: str | None = None
    allowed_users: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IMessageConfig:
    allowed_contacts: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MatrixConfig:
    homeserver: str = DEFAULT_MATRIX_HOMESERVER
    access_token: str = ""
    user_id: str | None = None
    device_id: str | None = None
    room_id: str = DEFAULT_MATRIX_ROOM
    allowed_users: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class SignalConfig:
    account: str
    http_url: str = DEFAULT_SIGNAL_HTTP_URL
    group_id: str | None = None
    allowed_from: list[str] = field(default_factory=_allow_all)
    ignore_attachments: bool = False
    ignore_stories: bool = True


@dataclass(frozen=True)
class WhatsAppConfig:
    access_token: str | None = None
    phone_number_id: str | None = None
    verify_token: str | None = DEFAULT_WHATSAPP_VERIFY_TOKEN
    app_secret: str | None = None
    session_path: str | None = None
    pair_phone: str | None = None
    pair_code: str | None = None
    allowed_numbers: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class LinqConfig:
    api_token: str
    from_phone: str = DEFAULT_LINQ_FROM_PHONE
    signing_secret: str | None = None
    allowed_senders: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class WebhookConfig:
    port: int = DEFAULT_WEBHOOK_PORT
    secret: str | None = None


@dataclass(frozen=True)
class IrcConfig:
    server: str = DEFAULT_IRC_SERVER
    port: int = DEFAULT_IRC_PORT
    nickname: str = DEFAULT_IRC_NICKNAME
    username: str | None = None
    channels: list[str] = field(default_factory=lambda: ["#general"])
    allowed_users: list[str] = field(default_factory=_allow_all)
    server_password: str | None = None
    nickserv_password: str | None = None
    sasl_password: str | None = None
    verify_tls: bool = True


@dataclass(frozen=True)
class NextcloudTalkConfig:
    base_url: str
    app_token: str
    webhook_secret: str | None = None
    allowed_users: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class DingTalkConfig:
    client_id: str
    client_secret: str
    allowed_users: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class QQConfig:
    app_id: str
    app_secret: str
    allowed_users: list[str] = field(default_factory=_allow_all)


@dataclass(frozen=True)
class LarkConfig:
    app_id: str
    app_secret: str
    encrypt_key: str | None = None
    verification_token: str | None = None
    allowed_users: list[str] = field(default_factory=_allow_all)
    mention_only: bool = False
    use_feishu: bool = False
    receive_mode: str = "websocket"
    port: int | None = None


@dataclass(frozen=True)
class FeishuConfig:
    app_id: str
    app_secret: str
    encrypt_key: str | None = None
    verification_token: str | None = None
    allowed_users: list[str] = field(default_factory=_allow_all)
    receive_mode: str = "websocket"
    port: int | None = None


@dataclass(frozen=True)
class NostrConfig:
    private_key: str
    relays: list[str] = field(default_factory=lambda: list(DEFAULT_NOSTR_RELAYS))
    allowed_pubkeys: list[str] = field(default_factory=_allow_all)


ChannelConfig = Union[
    TelegramConfig,
    DiscordConfig,
    SlackConfig,
    IMessageConfig,
    MatrixConfig,
    SignalConfig,
    WhatsAppConfig,
    LinqConfig,
    WebhookConfig,
    IrcConfig,
    NextcloudTalkConfig,
    DingTalkConfig,
    QQConfig,
    LarkConfig,
    FeishuConfig,
    NostrConfig,
]

CHANNEL_CONFIG_TYPES: dict[ChannelChoice, type] = {
    ChannelChoice.TELEGRAM: TelegramConfig,
    ChannelChoice.DISCORD: DiscordConfig,
    ChannelChoice.SLACK: SlackConfig,
    ChannelChoice.IMESSAGE: IMessageConfig,
    ChannelChoice.MATRIX: MatrixConfig,
    ChannelChoice.SIGNAL: SignalConfig,
    ChannelChoice.WHATSAPP: WhatsAppConfig,
    ChannelChoice.LINQ: LinqConfig,
    ChannelChoice.IRC: IrcConfig,
    ChannelChoice.WEBHOOK: WebhookConfig,
    ChannelChoice.NEXTCLOUD_TALK: NextcloudTalkConfig,
    ChannelChoice.DINGTALK: DingTalkConfig,
    ChannelChoice.QQ_OFFICIAL: QQConfig,
    ChannelChoice.LARK: LarkConfig,
    ChannelChoice.FEISHU: FeishuConfig,
    ChannelChoice.NOSTR: NostrConfig,
}


def channel_for_config(config: ChannelConfig) -> ChannelChoice:
    for choice, config_type in CHANNEL_CONFIG_TYPES.items():
        if isinstance(config, config_type):
            return choice
    raise TypeError(f"Unknown channel config type: {type(config).__name__}")


def parse_list_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _optional(raw: str) -> str | None:
    return raw if raw else None


def _parse_port(raw: str) -> int:
    # plain ASCII digits only; int() would also take "+80", " 80" and "8_0"
    if not (raw.isascii() and raw.isdigit()):
        return DEFAULT_WEBHOOK_PORT
    port = int(raw)
    if port <= 65535:
        return port
    return DEFAULT_WEBHOOK_PORT


def build_channel_config(choice: ChannelChoice, primary: str, aux: str) -> ChannelConfig | None:
    """Map the two collected channel fields onto ``choice``'s config.

    Both values are expected trimmed. Returns ``None`` when the channel
    needs no sub-config or a required token was left empty.
    """
    if choice == ChannelChoice.TELEGRAM:
        if not primary:
            return None
        return TelegramConfig(bot_token=primary, allowed_users=parse_list_csv(aux))
    if choice == ChannelChoice.DISCORD:
        if not primary:
            return None
        return DiscordConfig(bot_token=primary, allowed_users=parse_list_csv(aux))
    if choice == ChannelChoice.SLACK:
        if not primary:
            return None
        return SlackConfig(bot_token=primary, allowed_users=parse_list_csv(aux))
    if choice == ChannelChoice.WEBHOOK:
        return WebhookConfig(port=_parse_port(primary), secret=_optional(aux))
    if choice == ChannelChoice.IMESSAGE:
        return IMessageConfig(allowed_contacts=parse_list_csv(aux))
    if choice == ChannelChoice.MATRIX:
        return MatrixConfig(homeserver=aux or DEFAULT_MATRIX_HOMESERVER, access_token=primary)
    if choice == ChannelChoice.SIGNAL:
        return SignalConfig(account=primary, group_id=_optional(aux))
    if choice == ChannelChoice.WHATSAPP:
        return WhatsAppConfig(access_token=_optional(primary), phone_number_id=_optional(aux))
    if choice == ChannelChoice.LINQ:
        return LinqConfig(api_token=primary, from_phone=aux or DEFAULT_LINQ_FROM_PHONE)
    if choice == ChannelChoice.IRC:
        return IrcConfig(server=primary or DEFAULT_IRC_SERVER, nickname=aux or DEFAULT_IRC_NICKNAME)
    if choice == ChannelChoice.NEXTCLOUD_TALK:
        return NextcloudTalkConfig(base_url=primary, app_token=aux)
    if choice == ChannelChoice.DINGTALK:
        return DingTalkConfig(client_id=primary, client_secret=aux)
    if choice == ChannelChoice.QQ_OFFICIAL:
        return QQConfig(app_id=primary, app_secret=aux)
    if choice == ChannelChoice.LARK:
        return LarkConfig(app_id=primary, app_secret=aux)
    if choice == ChannelChoice.FEISHU:
        return FeishuConfig(app_id=primary, app_secret=aux)
    if choice == ChannelChoice.NOSTR:
        allowed = parse_list_csv(aux) if aux else _allow_all()
        return NostrConfig(private_key=primary, allowed_pubkeys=allowed)
    return None


def _config_from_dict(config_type: type, raw: dict[str, Any]) -> ChannelConfig:
    known = {item.name for item in fields(config_type)}
    return config_type(**{key: value for key, value in raw.items() if key in known})


@dataclass
class ChannelsConfig:
    """The ``channels_config`` section: a CLI flag plus one slot per channel."""

    cli: bool = True
    configured: dict[ChannelChoice, ChannelConfig] = field(default_factory=dict)

    @classmethod
    def from_selection(cls, config: ChannelConfig | None) -> "ChannelsConfig":
        channels = cls(cli=True)
        if config is not None:
            channels.configured[channel_for_config(config)] = config
        return channels

    def get(self, choice: ChannelChoice) -> ChannelConfig | None:
        return self.configured.get(choice)

    def channels(self) -> list[ChannelChoice]:
        return [choice for choice in CHANNEL_CONFIG_TYPES if choice in self.configured]

    def channels_except_webhook(self) -> list[ChannelChoice]:
        return [choice for choice in self.channels() if choice != ChannelChoice.WEBHOOK]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"cli": self.cli}
        for choice in CHANNEL_CONFIG_TYPES:
            config = self.configured.get(choice)
            payload[choice.value] = asdict(config) if config is not None else None
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ChannelsConfig":
        configured: dict[ChannelChoice, ChannelConfig] = {}
        for choice, config_type in CHANNEL_CONFIG_TYPES.items():
            section = raw.get(choice.value)
            if isinstance(section, dict):
                configured[choice] = _config_from_dict(config_type, section)
        return cls(cli=bool(raw.get("cli", True)), configured=configured)
