"""Configuration — environment loading and the static channel route table."""

import math
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from dotenv import load_dotenv

from discord_relay.domain.models import ChannelRoute

load_dotenv()

DEFAULT_ISSUER = "discord-bot"
DEFAULT_PORT = 3000
DEFAULT_RELAY_TIMEOUT = 10.0

# (channel id env var, webhook env var, label, channel type)
# A route may also carry its own <LABEL>_JWT_SECRET / <LABEL>_JWT_ISSUER.
ROUTE_ENV_VARS = [
    ("TARGET_CHANNEL_ID", "N8N_WEBHOOK", "n8n", None),
    ("FINANCE_CHANNEL_ID", "FINANCE_WEBHOOK", "finance", "finance"),
    ("YOUTUBE_CHANNEL_ID", "YOUTUBE_WEBHOOK", "youtube", "youtube"),
]


def build_routes(routes: Iterable[ChannelRoute]) -> Mapping[int, ChannelRoute]:
    """Freeze routes into a read-only channel_id → route mapping."""
    return MappingProxyType({r.channel_id: r for r in routes})


@dataclass
class AppConfig:
    """Typed configuration, built once at startup."""

    discord_token: str = ""
    jwt_secret: str = ""
    jwt_issuer: str = DEFAULT_ISSUER
    port: int = DEFAULT_PORT
    relay_timeout: float = DEFAULT_RELAY_TIMEOUT
    routes: Mapping[int, ChannelRoute] = field(default_factory=lambda: build_routes([]))
    # Problems found while parsing the environment; reported by validate()
    invalid_settings: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables."""
        env = os.environ if environ is None else environ
        get = lambda name, default="": (env.get(name) or default).strip()
        invalid: List[str] = []

        routes: List[ChannelRoute] = []
        seen = set()
        for id_var, url_var, label, channel_type in ROUTE_ENV_VARS:
            raw_id, url = get(id_var), get(url_var)
            if not raw_id and not url:
                continue
            if not raw_id or not url:
                invalid.append(f"{id_var} and {url_var} must be set together")
                continue
            if not raw_id.isdigit():
                invalid.append(f"{id_var}={raw_id!r} is not a numeric channel id")
                continue
            channel_id = int(raw_id)
            if channel_id in seen:
                invalid.append(f"{id_var}={channel_id} is already routed")
                continue
            seen.add(channel_id)
            routes.append(ChannelRoute(
                channel_id=channel_id,
                label=label,
                webhook_url=url,
                channel_type=channel_type,
                secret=get(f"{label.upper()}_JWT_SECRET") or None,
                issuer=get(f"{label.upper()}_JWT_ISSUER") or None,
            ))

        port = DEFAULT_PORT
        raw_port = get("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            invalid.append(f"PORT={raw_port!r} is not an integer")

        relay_timeout = DEFAULT_RELAY_TIMEOUT
        raw_timeout = get("RELAY_TIMEOUT_SECONDS", str(DEFAULT_RELAY_TIMEOUT))
        try:
            relay_timeout = float(raw_timeout)
        except ValueError:
            invalid.append(f"RELAY_TIMEOUT_SECONDS={raw_timeout!r} is not a number")

        return cls(
            discord_token=get("DISCORD_TOKEN"),
            jwt_secret=get("JWT_SECRET"),
            jwt_issuer=get("JWT_ISSUER", DEFAULT_ISSUER),
            port=port,
            relay_timeout=relay_timeout,
            routes=build_routes(routes),
            invalid_settings=invalid,
        )

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when startable)."""
        problems = list(self.invalid_settings)
        if not self.discord_token:
            problems.append("DISCORD_TOKEN is not set")
        if not self.jwt_secret and not (self.routes and all(r.secret for r in self.routes.values())):
            problems.append("JWT_SECRET is not set")
        if not self.routes:
            problems.append(
                "no channels routed (set TARGET_CHANNEL_ID + N8N_WEBHOOK, "
                "FINANCE_CHANNEL_ID + FINANCE_WEBHOOK or YOUTUBE_CHANNEL_ID + YOUTUBE_WEBHOOK)"
            )
        for route in self.routes.values():
            if not route.webhook_url.startswith(("http://", "https://")):
                problems.append(f"webhook for {route.label} is not an http(s) URL")
        if not 0 < self.port < 65536:
            problems.append(f"PORT={self.port} is out of range")
        if not math.isfinite(self.relay_timeout):
            problems.append("RELAY_TIMEOUT_SECONDS must be a finite number")
        elif self.relay_timeout <= 0:
            problems.append("RELAY_TIMEOUT_SECONDS must be positive")
        return problems
