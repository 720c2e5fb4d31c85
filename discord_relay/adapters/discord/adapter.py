"""Discord adapter — bridges discord.Client to EventBridge.

RelayBot converts each discord.Message to an InboundMessage and hands it to
the bridge along with a typing indicator bound to the client.
"""

import base64
import sys

import discord

from discord_relay.domain.bridge import EventBridge
from discord_relay.ports.inbound import Attachment, InboundMessage


def _log(msg: str):
    print(msg, file=sys.stderr)


def to_attachment(attachment: discord.Attachment) -> Attachment:
    """Convert a discord.Attachment; voice fields exist on discord.py >= 2.3."""
    waveform = getattr(attachment, "waveform", None)
    return Attachment(
        url=attachment.url,
        proxy_url=attachment.proxy_url,
        filename=attachment.filename,
        size=attachment.size,
        content_type=attachment.content_type,
        width=attachment.width,
        height=attachment.height,
        duration=getattr(attachment, "duration", None),
        waveform=base64.b64encode(waveform).decode("ascii") if waveform else None,
    )


def to_inbound(message: discord.Message) -> InboundMessage:
    """Convert a Discord message to platform-agnostic InboundMessage."""
    return InboundMessage(
        message_id=str(message.id),
        content=message.content or "",
        author_name=message.author.name,
        author_id=message.author.id,
        is_bot=message.author.bot,
        channel_id=message.channel.id,
        channel_name=getattr(message.channel, "name", None) or "",
        guild_id=str(message.guild.id) if message.guild else None,
        created_at=message.created_at,
        attachments=tuple(to_attachment(a) for a in message.attachments),
    )


class DiscordTypingIndicator:
    """TypingPort implementation using discord.Client."""

    def __init__(self, client: discord.Client):
        self._client = client

    async def send_typing(self, channel_id: int) -> None:
        channel = self._client.get_channel(channel_id)
        if channel:
            await channel.typing()


class RelayBot(discord.Client):
    """Thin Discord client that delegates every message to EventBridge."""

    def __init__(self, bridge: EventBridge, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._bridge = bridge
        self._indicator = DiscordTypingIndicator(self)

    @property
    def bridge(self) -> EventBridge:
        return self._bridge

    async def on_ready(self):
        _log(f"[relay] logged in as {self.user}")
        _log(f"[relay] monitoring {len(self._bridge.monitored_channels)} channel(s)")

    async def on_message(self, message: discord.Message):
        # Ignore own messages
        if self.user and message.author == self.user:
            return
        await self._bridge.handle(to_inbound(message), self._indicator)
