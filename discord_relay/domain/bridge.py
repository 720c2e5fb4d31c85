"""Event bridge — filters inbound messages and drives classify → build → relay.

Platform-agnostic: the Discord adapter converts discord.Message into
InboundMessage and hands it here together with a TypingPort.
"""

import asyncio
import sys
from typing import FrozenSet, Mapping, Optional, Set

from discord_relay.domain.classifier import classify
from discord_relay.domain.models import ChannelRoute, MessageKind
from discord_relay.domain.payload import build_payload
from discord_relay.ports.inbound import InboundMessage
from discord_relay.ports.outbound import RelayPort, RelayResult, TypingPort

TYPING_INTERVAL = 5.0  # seconds between typing indicator refreshes


def _log(msg: str):
    print(msg, file=sys.stderr)


class EventBridge:
    """Routes messages from monitored channels to their destinations.

    Each dispatch runs independently; there is no lock shared between
    messages, so the order in which webhook calls complete is not guaranteed.
    """

    def __init__(
        self,
        routes: Mapping[int, ChannelRoute],
        relay: RelayPort,
        typing_interval: float = TYPING_INTERVAL,
    ):
        self._routes = routes
        self._relay = relay
        self._typing_interval = typing_interval
        self._in_flight: Set[str] = set()

    @property
    def monitored_channels(self) -> FrozenSet[int]:
        return frozenset(self._routes)

    @property
    def in_flight(self) -> FrozenSet[str]:
        """Message ids currently being dispatched."""
        return frozenset(self._in_flight)

    def route_for(self, channel_id: int) -> Optional[ChannelRoute]:
        return self._routes.get(channel_id)

    def should_forward(self, message: InboundMessage) -> bool:
        if message.is_bot:
            return False
        return message.channel_id in self._routes

    @staticmethod
    def resolve_kind(message: InboundMessage, route: ChannelRoute) -> MessageKind:
        if route.channel_type == "youtube":
            return MessageKind.YOUTUBE_REQUEST
        return classify(message.attachments)

    async def handle(
        self,
        message: InboundMessage,
        indicator: Optional[TypingPort] = None,
    ) -> Optional[RelayResult]:
        """Forward ``message`` if it comes from a monitored channel.

        Returns None when the message is ignored. The typing refresh task is
        cancelled on every exit path.
        """
        if not self.should_forward(message):
            return None
        route = self._routes[message.channel_id]

        self._in_flight.add(message.message_id)
        refresh_task: Optional[asyncio.Task] = None
        try:
            if indicator is not None:
                await self._send_typing(indicator, message.channel_id)
                refresh_task = asyncio.create_task(
                    self._refresh_typing(indicator, message.channel_id)
                )
            return await self._dispatch(message, route)
        finally:
            if refresh_task is not None:
                refresh_task.cancel()
            self._in_flight.discard(message.message_id)

    async def _dispatch(self, message: InboundMessage, route: ChannelRoute) -> RelayResult:
        kind = self.resolve_kind(message, route)
        try:
            payload = build_payload(message, kind)
            result = await self._relay.relay(route, kind, payload)
        except Exception as e:
            _log(f"[relay] error dispatching {kind.value} message {message.message_id}: {e}")
            return RelayResult(success=False, message_type=kind.value, error=str(e))

        if result.success:
            _log(f"[relay] sent {kind.value} from #{message.channel_name} to {route.label}")
        else:
            _log(f"[relay] failed to send {kind.value} to {route.label}: {result.error}")
        return result

    async def _refresh_typing(self, indicator: TypingPort, channel_id: int):
        while True:
            await asyncio.sleep(self._typing_interval)
            await self._send_typing(indicator, channel_id)

    @staticmethod
    async def _send_typing(indicator: TypingPort, channel_id: int):
        try:
            await indicator.send_typing(channel_id)
        except Exception as e:
            _log(f"[relay] typing indicator failed in ch={channel_id}: {e}")
