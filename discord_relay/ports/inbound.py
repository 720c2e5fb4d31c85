"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Attachment:
    """A file attached to a chat message."""

    url: str
    proxy_url: str
    filename: str
    size: int
    content_type: Optional[str] = None
    # images
    width: Optional[int] = None
    height: Optional[int] = None
    # voice messages
    duration: Optional[float] = None
    waveform: Optional[str] = None  # base64


@dataclass(frozen=True)
class InboundMessage:
    """Discord-agnostic view of a message event."""

    message_id: str
    content: str
    author_name: str
    author_id: int
    is_bot: bool
    channel_id: int
    channel_name: str
    guild_id: Optional[str]
    created_at: datetime
    attachments: Tuple[Attachment, ...] = ()
