"""Relay adapters — signed webhook delivery."""

from discord_relay.adapters.relay.signing import sign_envelope, verify_envelope
from discord_relay.adapters.relay.webhook_client import WebhookRelayClient

__all__ = [
    "WebhookRelayClient",
    "sign_envelope",
    "verify_envelope",
]
