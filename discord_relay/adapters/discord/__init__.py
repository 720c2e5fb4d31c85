"""Discord adapter package."""

from discord_relay.adapters.discord.adapter import (
    DiscordTypingIndicator,
    RelayBot,
    to_attachment,
    to_inbound,
)

__all__ = [
    "DiscordTypingIndicator",
    "RelayBot",
    "to_attachment",
    "to_inbound",
]
