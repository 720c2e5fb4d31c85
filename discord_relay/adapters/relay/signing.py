"""Relay envelope — short-lived HS256 JWT wrapped around a payload."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from discord_relay.domain.models import MessageKind

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(minutes=5)


def build_claims(
    payload: Mapping[str, Any],
    kind: MessageKind,
    issuer: str,
    channel_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Claims carried by the envelope.

    ``iat``/``exp`` are epoch seconds as JWT requires; ``timestamp`` is the
    issuance time in epoch milliseconds.
    """
    now = now or datetime.now(timezone.utc)
    issued_at = int(now.timestamp())
    claims = {
        "iss": issuer,
        "iat": issued_at,
        "exp": issued_at + int(TOKEN_TTL.total_seconds()),
        "timestamp": int(now.timestamp() * 1000),
        "messageType": MessageKind(kind).value,
        "data": dict(payload),
    }
    if channel_type:
        claims["channelType"] = channel_type
    return claims


def sign_envelope(
    payload: Mapping[str, Any],
    kind: MessageKind,
    secret: str,
    issuer: str,
    channel_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    if not secret:
        raise ValueError("signing secret is empty")
    claims = build_claims(payload, kind, issuer, channel_type=channel_type, now=now)
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def verify_envelope(token: str, secret: str, issuer: str) -> Dict[str, Any]:
    """Decode and verify an envelope.

    Raises jwt.ExpiredSignatureError once the token is older than TOKEN_TTL and
    jwt.InvalidTokenError for any other verification failure.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[ALGORITHM],
        issuer=issuer,
        options={"require": ["exp", "iat", "iss"]},
    )
