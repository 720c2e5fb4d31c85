"""Payload builder — InboundMessage + MessageKind to a destination-ready record.

Pure Python, no framework dependencies. Output depends only on the input
message; the creation time is copied from the message, never read from a clock.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from discord_relay.domain.classifier import is_image, is_voice
from discord_relay.domain.models import (
    AttachmentDescriptor,
    ImageDescriptor,
    ImagePayload,
    MessageKind,
    NormalizedPayload,
    RequestPayload,
    TextPayload,
    VoiceDescriptor,
    VoicePayload,
)
from discord_relay.ports.inbound import InboundMessage


def format_time(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _base_fields(message: InboundMessage, kind: MessageKind) -> Dict[str, Any]:
    return {
        "content": message.content,
        "author": message.author_name,
        "channel": message.channel_name,
        "channel_id": str(message.channel_id),
        "guild_id": message.guild_id,
        "time": format_time(message.created_at),
        "message_id": message.message_id,
        "message_type": kind,
        "attachment_count": len(message.attachments),
    }


def _build_image(message: InboundMessage, base: Dict[str, Any]) -> ImagePayload:
    images = tuple(
        ImageDescriptor(
            url=a.url,
            proxy_url=a.proxy_url,
            filename=a.filename,
            size=a.size,
            width=a.width,
            height=a.height,
            content_type=a.content_type,
        )
        for a in message.attachments
        if is_image(a)
    )
    # Zero matches leaves an empty list rather than failing.
    return ImagePayload(**base, images=images)


def _build_voice(message: InboundMessage, base: Dict[str, Any]) -> VoicePayload:
    first = next((a for a in message.attachments if is_voice(a)), None)
    if first is None:
        return VoicePayload(**base)
    voice = VoiceDescriptor(
        url=first.url,
        proxy_url=first.proxy_url,
        filename=first.filename,
        size=first.size,
        content_type=first.content_type,
        duration=first.duration,
        waveform=first.waveform,
    )
    return VoicePayload(**base, voice=voice)


def _build_text(message: InboundMessage, base: Dict[str, Any]) -> TextPayload:
    # Anything a more specific kind would have claimed is left out.
    unclaimed = tuple(
        AttachmentDescriptor(
            url=a.url,
            filename=a.filename,
            size=a.size,
            content_type=a.content_type,
        )
        for a in message.attachments
        if not is_image(a) and not is_voice(a)
    )
    return TextPayload(**base, attachments=unclaimed)


def build_payload(message: InboundMessage, kind: MessageKind) -> NormalizedPayload:
    """Build the normalized payload for ``message`` classified as ``kind``."""
    kind = MessageKind(kind)
    base = _base_fields(message, kind)
    if kind is MessageKind.IMAGE:
        return _build_image(message, base)
    if kind is MessageKind.VOICE:
        return _build_voice(message, base)
    if kind is MessageKind.YOUTUBE_REQUEST:
        return RequestPayload(**base, query=message.content.strip())
    return _build_text(message, base)
