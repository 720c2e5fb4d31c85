"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MessageKind(str, Enum):
    """Closed set of message classifications (wire tag = value)."""

    TEXT = "text"
    IMAGE = "image"
    VOICE = "voice"
    YOUTUBE_REQUEST = "youtube_request"


@dataclass(frozen=True)
class ChannelRoute:
    """Static routing entry: a monitored channel and where its messages go.

    ``secret``/``issuer`` override the relay-wide signing settings for this
    destination; None falls back to them.
    """

    channel_id: int
    label: str
    webhook_url: str
    channel_type: Optional[str] = None  # e.g. "finance", "youtube"
    secret: Optional[str] = field(default=None, repr=False)
    issuer: Optional[str] = None


@dataclass(frozen=True)
class ImageDescriptor:
    url: str
    proxy_url: str
    filename: str
    size: int
    width: Optional[int]
    height: Optional[int]
    content_type: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "proxyUrl": self.proxy_url,
            "filename": self.filename,
            "size": self.size,
            "width": self.width,
            "height": self.height,
            "contentType": self.content_type,
        }


@dataclass(frozen=True)
class VoiceDescriptor:
    url: str
    proxy_url: str
    filename: str
    size: int
    content_type: Optional[str]
    duration: Optional[float] = None
    waveform: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "url": self.url,
            "proxyUrl": self.proxy_url,
            "filename": self.filename,
            "size": self.size,
            "contentType": self.content_type,
        }
        if self.duration is not None:
            data["duration"] = self.duration
        if self.waveform is not None:
            data["waveform"] = self.waveform
        return data


@dataclass(frozen=True)
class AttachmentDescriptor:
    url: str
    filename: str
    size: int
    content_type: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "filename": self.filename,
            "size": self.size,
            "contentType": self.content_type,
        }


@dataclass(frozen=True)
class NormalizedPayload:
    """Fields every relayed message carries, whatever its kind.

    Subclasses add exactly one kind-specific group; ``to_dict`` renders the
    JSON body sent to the destination.
    """

    content: str
    author: str
    channel: str
    channel_id: str
    guild_id: Optional[str]
    time: str  # ISO-8601, UTC
    message_id: str
    message_type: MessageKind
    attachment_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "author": self.author,
            "channel": self.channel,
            "channelId": self.channel_id,
            "guildId": self.guild_id,
            "time": self.time,
            "messageId": self.message_id,
            "messageType": self.message_type.value,
            "attachmentCount": self.attachment_count,
        }


@dataclass(frozen=True)
class TextPayload(NormalizedPayload):
    attachments: Tuple[AttachmentDescriptor, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.attachments:
            data["attachments"] = [a.to_dict() for a in self.attachments]
        return data


@dataclass(frozen=True)
class ImagePayload(NormalizedPayload):
    images: Tuple[ImageDescriptor, ...] = ()

    @property
    def image_count(self) -> int:
        return len(self.images)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["images"] = [i.to_dict() for i in self.images]
        data["imageCount"] = self.image_count
        return data


@dataclass(frozen=True)
class VoicePayload(NormalizedPayload):
    voice: Optional[VoiceDescriptor] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.voice is not None:
            data["voice"] = self.voice.to_dict()
        return data


@dataclass(frozen=True)
class RequestPayload(NormalizedPayload):
    """Platform-specific request: the whole message text is the parameter."""

    query: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["query"] = self.query
        return data
