"""Webhook relay client using aiohttp."""

import asyncio
import json
from typing import Dict, Optional, Tuple

import aiohttp
import jwt

from discord_relay.adapters.relay.signing import sign_envelope
from discord_relay.domain.models import ChannelRoute, MessageKind, NormalizedPayload
from discord_relay.ports.outbound import RelayResult

DEFAULT_TIMEOUT = 10.0


class WebhookRelayClient:
    """Signs a payload and POSTs it once to the route's webhook. No retries."""

    def __init__(self, secret: str, issuer: str, timeout: float = DEFAULT_TIMEOUT):
        self._secret = secret
        self._issuer = issuer
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._secret)

    def signing_for(self, route: ChannelRoute) -> Tuple[str, str]:
        """(secret, issuer) for a route, falling back to the client defaults."""
        return route.secret or self._secret, route.issuer or self._issuer

    @staticmethod
    def build_headers(
        token: str,
        kind: MessageKind,
        channel_type: Optional[str] = None,
    ) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
            "X-Message-Type": MessageKind(kind).value,
        }
        if channel_type:
            headers["X-Channel-Type"] = channel_type
        return headers

    async def relay(
        self,
        route: ChannelRoute,
        kind: MessageKind,
        payload: NormalizedPayload,
    ) -> RelayResult:
        kind = MessageKind(kind)
        body = payload.to_dict()
        secret, issuer = self.signing_for(route)
        try:
            token = sign_envelope(
                body, kind, secret, issuer, channel_type=route.channel_type,
            )
        except (ValueError, jwt.PyJWTError) as e:
            return RelayResult(success=False, message_type=kind.value, error=f"signing failed: {e}")

        headers = self.build_headers(token, kind, route.channel_type)
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    route.webhook_url,
                    data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                    headers=headers,
                ) as resp:
                    status = resp.status
        except asyncio.TimeoutError:
            return RelayResult(
                success=False, message_type=kind.value,
                error=f"timeout after {self._timeout:g}s",
            )
        except aiohttp.ClientError as e:
            return RelayResult(
                success=False, message_type=kind.value, error=str(e) or type(e).__name__,
            )

        if status >= 400:
            return RelayResult(
                success=False, message_type=kind.value, status=status, error=f"HTTP {status}",
            )
        return RelayResult(success=True, message_type=kind.value, status=status)
