"""Port interfaces (Hexagonal Architecture)."""

from discord_relay.ports.inbound import Attachment, InboundMessage
from discord_relay.ports.outbound import RelayPort, RelayResult, TypingPort

__all__ = [
    "Attachment",
    "InboundMessage",
    "RelayPort",
    "RelayResult",
    "TypingPort",
]
