"""Domain layer — pure Python, no framework dependencies."""

from discord_relay.domain.models import (
    AttachmentDescriptor,
    ChannelRoute,
    ImageDescriptor,
    ImagePayload,
    MessageKind,
    NormalizedPayload,
    RequestPayload,
    TextPayload,
    VoiceDescriptor,
    VoicePayload,
)
from discord_relay.domain.classifier import classify, is_image, is_voice
from discord_relay.domain.payload import build_payload

__all__ = [
    "AttachmentDescriptor",
    "ChannelRoute",
    "ImageDescriptor",
    "ImagePayload",
    "MessageKind",
    "NormalizedPayload",
    "RequestPayload",
    "TextPayload",
    "VoiceDescriptor",
    "VoicePayload",
    "classify",
    "is_image",
    "is_voice",
    "build_payload",
]
