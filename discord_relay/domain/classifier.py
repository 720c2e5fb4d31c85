"""Message classification — attachment set to MessageKind.

Pure Python, no framework dependencies. Precedence is first-match over the
whole attachment set: image, then voice, then text.
"""

from typing import Iterable

from discord_relay.domain.models import MessageKind
from discord_relay.ports.inbound import Attachment

VOICE_EXTENSIONS = frozenset({"ogg", "mp3", "wav", "webm"})


def _extension(filename: str) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def is_image(attachment: Attachment) -> bool:
    content_type = (attachment.content_type or "").lower()
    return content_type.startswith("image/")


def is_voice(attachment: Attachment) -> bool:
    content_type = (attachment.content_type or "").lower()
    if content_type.startswith("audio/"):
        return True
    return _extension(attachment.filename) in VOICE_EXTENSIONS


def classify(attachments: Iterable[Attachment]) -> MessageKind:
    """Return the kind of a message from its attachments (text is never read)."""
    attachments = list(attachments)
    if any(is_image(a) for a in attachments):
        return MessageKind.IMAGE
    if any(is_voice(a) for a in attachments):
        return MessageKind.VOICE
    return MessageKind.TEXT
