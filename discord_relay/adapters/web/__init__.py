"""Web adapter — liveness endpoint."""

from discord_relay.adapters.web.server import app

__all__ = ["app"]
