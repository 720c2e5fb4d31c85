"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from discord_relay.domain.models import ChannelRoute, MessageKind, NormalizedPayload


@dataclass
class RelayResult:
    """Outcome of a single webhook delivery attempt."""

    success: bool
    message_type: Optional[str] = None
    status: Optional[int] = None
    error: Optional[str] = None


@runtime_checkable
class RelayPort(Protocol):
    """Interface for delivering a payload to a destination."""

    async def relay(
        self,
        route: ChannelRoute,
        kind: MessageKind,
        payload: NormalizedPayload,
    ) -> RelayResult: ...


@runtime_checkable
class TypingPort(Protocol):
    """Interface for the "processing" indicator shown in a channel."""

    async def send_typing(self, channel_id: int) -> None: ...
