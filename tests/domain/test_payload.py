"""Tests for domain/payload.py — normalized payload shaping."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from discord_relay.domain.classifier import classify
from discord_relay.domain.models import (
    ImagePayload,
    MessageKind,
    RequestPayload,
    TextPayload,
    VoicePayload,
)
from discord_relay.domain.payload import build_payload, format_time
from discord_relay.ports.inbound import Attachment, InboundMessage

CREATED = datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc)

INVARIANT_KEYS = {
    "content", "author", "channel", "channelId", "guildId",
    "time", "messageId", "messageType", "attachmentCount",
}


def _att(filename, content_type=None, **kwargs) -> Attachment:
    fields = dict(
        url=f"https://x/{filename}",
        proxy_url=f"https://proxy/{filename}",
        filename=filename,
        size=100,
        content_type=content_type,
    )
    fields.update(kwargs)
    return Attachment(**fields)


def _msg(content="hello", attachments=(), guild_id="555") -> InboundMessage:
    return InboundMessage(
        message_id="9001",
        content=content,
        author_name="alice",
        author_id=1,
        is_bot=False,
        channel_id=100,
        channel_name="general",
        guild_id=guild_id,
        created_at=CREATED,
        attachments=tuple(attachments),
    )


class TestFormatTime:
    def test_utc_milliseconds(self):
        assert format_time(CREATED) == "2024-05-01T12:30:00.123Z"

    def test_converts_offset_to_utc(self):
        kst = timezone(timedelta(hours=9))
        assert format_time(datetime(2024, 5, 1, 21, 0, tzinfo=kst)) == "2024-05-01T12:00:00.000Z"

    def test_naive_taken_as_utc(self):
        assert format_time(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00.000Z"


class TestInvariantFields:
    def test_text_hello_scenario(self):
        msg = _msg("hello")
        kind = classify(msg.attachments)
        assert kind is MessageKind.TEXT

        data = build_payload(msg, kind).to_dict()
        assert set(data) == INVARIANT_KEYS
        assert data["content"] == "hello"
        assert data["author"] == "alice"
        assert data["channel"] == "general"
        assert data["channelId"] == "100"
        assert data["guildId"] == "555"
        assert data["time"] == "2024-05-01T12:30:00.123Z"
        assert data["messageId"] == "9001"
        assert data["messageType"] == "text"
        assert data["attachmentCount"] == 0

    def test_missing_guild_is_null(self):
        data = build_payload(_msg(guild_id=None), MessageKind.TEXT).to_dict()
        assert "guildId" in data
        assert data["guildId"] is None

    def test_accepts_kind_string(self):
        payload = build_payload(_msg(), "text")
        assert payload.message_type is MessageKind.TEXT


class TestImagePayload:
    def test_png_scenario(self):
        att = Attachment(
            url="https://x/1.png",
            proxy_url="https://proxy/1.png",
            filename="1.png",
            size=100,
            content_type="image/png",
            width=10,
            height=10,
        )
        msg = _msg("", [att])
        kind = classify(msg.attachments)
        assert kind is MessageKind.IMAGE

        payload = build_payload(msg, kind)
        assert isinstance(payload, ImagePayload)
        data = payload.to_dict()
        assert data["imageCount"] == 1
        assert data["images"] == [{
            "url": "https://x/1.png",
            "proxyUrl": "https://proxy/1.png",
            "filename": "1.png",
            "size": 100,
            "width": 10,
            "height": 10,
            "contentType": "image/png",
        }]

    def test_only_images_in_order(self):
        atts = [
            _att("b.jpg", "image/jpeg"),
            _att("memo.ogg", "audio/ogg"),
            _att("a.png", "image/png"),
        ]
        data = build_payload(_msg(attachments=atts), MessageKind.IMAGE).to_dict()
        assert [i["filename"] for i in data["images"]] == ["b.jpg", "a.png"]
        assert data["imageCount"] == 2
        assert data["attachmentCount"] == 3

    def test_no_match_falls_back_to_empty_list(self):
        data = build_payload(_msg(attachments=[_att("doc.pdf", "application/pdf")]),
                             MessageKind.IMAGE).to_dict()
        assert data["images"] == []
        assert data["imageCount"] == 0
        assert "voice" not in data and "attachments" not in data


class TestVoicePayload:
    def test_first_match_only(self):
        atts = [
            _att("doc.pdf", "application/pdf"),
            _att("first.ogg", "audio/ogg", duration=3.5, waveform="AAEC"),
            _att("second.mp3"),
        ]
        payload = build_payload(_msg(attachments=atts), MessageKind.VOICE)
        assert isinstance(payload, VoicePayload)
        data = payload.to_dict()
        assert data["voice"] == {
            "url": "https://x/first.ogg",
            "proxyUrl": "https://proxy/first.ogg",
            "filename": "first.ogg",
            "size": 100,
            "contentType": "audio/ogg",
            "duration": 3.5,
            "waveform": "AAEC",
        }

    def test_optional_fields_omitted(self):
        data = build_payload(_msg(attachments=[_att("memo.wav")]), MessageKind.VOICE).to_dict()
        assert "duration" not in data["voice"]
        assert "waveform" not in data["voice"]
        assert data["voice"]["contentType"] is None

    def test_no_match_omits_voice(self):
        data = build_payload(_msg(attachments=[_att("doc.pdf", "application/pdf")]),
                             MessageKind.VOICE).to_dict()
        assert set(data) == INVARIANT_KEYS


class TestTextPayload:
    def test_generic_attachments(self):
        atts = [_att("doc.pdf", "application/pdf"), _att("notes")]
        payload = build_payload(_msg(attachments=atts), MessageKind.TEXT)
        assert isinstance(payload, TextPayload)
        data = payload.to_dict()
        assert data["attachments"] == [
            {"url": "https://x/doc.pdf", "filename": "doc.pdf", "size": 100,
             "contentType": "application/pdf"},
            {"url": "https://x/notes", "filename": "notes", "size": 100, "contentType": None},
        ]

    def test_skips_claimed_attachments(self):
        atts = [_att("a.png", "image/png"), _att("memo.ogg"), _att("doc.pdf", "application/pdf")]
        data = build_payload(_msg(attachments=atts), MessageKind.TEXT).to_dict()
        assert [a["filename"] for a in data["attachments"]] == ["doc.pdf"]

    def test_only_claimed_attachments_omits_field(self):
        data = build_payload(_msg(attachments=[_att("a.png", "image/png")]),
                             MessageKind.TEXT).to_dict()
        assert "attachments" not in data
        assert data["attachmentCount"] == 1


class TestRequestPayload:
    def test_trimmed_query(self):
        msg = _msg("  https://youtu.be/abc123 \n", [_att("a.png", "image/png")])
        payload = build_payload(msg, MessageKind.YOUTUBE_REQUEST)
        assert isinstance(payload, RequestPayload)
        data = payload.to_dict()
        assert data["query"] == "https://youtu.be/abc123"
        assert data["messageType"] == "youtube_request"
        assert "images" not in data and "attachments" not in data


class TestDeterminism:
    @pytest.mark.parametrize("kind", list(MessageKind))
    def test_identical_input_identical_json(self, kind):
        atts = [_att("a.png", "image/png", width=1, height=2), _att("memo.ogg"), _att("doc.pdf")]
        first = json.dumps(build_payload(_msg(attachments=atts), kind).to_dict())
        second = json.dumps(build_payload(_msg(attachments=atts), kind).to_dict())
        assert first == second
