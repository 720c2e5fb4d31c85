"""Launcher — runs the Discord relay bot and the liveness server together."""

import asyncio
import sys
from typing import Optional

import uvicorn

from discord_relay.adapters.discord.adapter import RelayBot
from discord_relay.adapters.relay.webhook_client import WebhookRelayClient
from discord_relay.adapters.web.server import app
from discord_relay.config import AppConfig
from discord_relay.domain.bridge import EventBridge


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_bot(config: AppConfig) -> RelayBot:
    """Wire config → relay client → bridge → Discord client."""
    relay = WebhookRelayClient(
        secret=config.jwt_secret,
        issuer=config.jwt_issuer,
        timeout=config.relay_timeout,
    )
    if not relay.is_configured:
        _log("[launcher] JWT_SECRET not set, relying on per-route secrets")
    bridge = EventBridge(config.routes, relay)
    return RelayBot(bridge)


def build_server(config: AppConfig) -> uvicorn.Server:
    return uvicorn.Server(uvicorn.Config(app, host="0.0.0.0", port=config.port, log_level="info"))


async def launch(config: Optional[AppConfig] = None) -> int:
    """Start bot and web server concurrently. Returns a process exit code.

    The two run as a unit: when either stops, the other is shut down too, so
    the liveness endpoint never outlives the Discord client.
    """
    config = config or AppConfig.from_env()
    problems = config.validate()
    if problems:
        for problem in problems:
            _log(f"[launcher] config error: {problem}")
        return 1

    for route in config.routes.values():
        _log(f"[launcher] ch={route.channel_id} → {route.label} ({route.channel_type or 'default'})")

    bot = build_bot(config)
    server = build_server(config)
    crashed = []

    async def _run_bot():
        try:
            await bot.start(config.discord_token)
        except Exception as e:
            crashed.append("bot")
            _log(f"[launcher] Discord client crashed: {e}")
        finally:
            await bot.close()
            server.should_exit = True

    async def _run_server():
        try:
            await server.serve()
        except Exception as e:
            crashed.append("server")
            _log(f"[launcher] web server crashed: {e}")
        finally:
            await bot.close()

    _log(f"[launcher] liveness server on port {config.port}")
    await asyncio.gather(_run_bot(), _run_server())
    return 1 if crashed else 0


def main():
    sys.exit(asyncio.run(launch()))


if __name__ == "__main__":
    main()
