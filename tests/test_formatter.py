"""Tests for markdown record formatting."""

from notebot.core.formatter import format_record
from notebot.core.models import AttachmentResult, IncomingMessage, MediaKind, Provenance


def _message(**kwargs):
    kwargs.setdefault("sender_id", "42")
    return IncomingMessage(**kwargs)


class TestFormatRecord:
    def test_text_only(self):
        out = format_record(_message(text="hello world"), [], "09:05:03")
        assert out == "\n---\n**09:05:03**\n\nhello world\n\n---\n"

    def test_forwarded_annotation(self):
        msg = _message(text="hi", provenance=Provenance(Provenance.USER, "@alice"))
        out = format_record(msg, [], "10:00:00")
        assert out.startswith("\n---\n**10:00:00** - Forwarded from @alice\n\n")

    def test_caption_used_when_no_text(self):
        out = format_record(_message(caption="look at this"), [], "10:00:00")
        assert "look at this\n" in out

    def test_no_body(self):
        out = format_record(_message(), [], "10:00:00")
        assert out == "\n---\n**10:00:00**\n\n\n---\n"

    def test_attachments_section(self):
        attachments = [
            AttachmentResult("1_abc123_photo.jpg", MediaKind.PHOTO),
            AttachmentResult("2_def456_plan_v2.docx", MediaKind.DOCUMENT, "plan v2.docx"),
            AttachmentResult("3_ghi789_voice.ogg", MediaKind.VOICE),
        ]
        out = format_record(_message(caption="files"), attachments, "12:00:00")
        assert out == (
            "\n---\n**12:00:00**\n\nfiles\n"
            "\n**Attachments:**\n"
            "![1_abc123_photo.jpg](../attachments/1_abc123_photo.jpg)\n"
            "- [plan v2.docx](../attachments/2_def456_plan_v2.docx) _(Document)_\n"
            "- [3_ghi789_voice.ogg](../attachments/3_ghi789_voice.ogg) _(Voice)_\n"
            "\n---\n"
        )

    def test_video_kinds_are_embedded(self):
        attachments = [
            AttachmentResult("v.mp4", MediaKind.VIDEO),
            AttachmentResult("n.mp4", MediaKind.VIDEO_NOTE),
            AttachmentResult("a.mp3", MediaKind.AUDIO, "song.mp3"),
        ]
        out = format_record(_message(), attachments, "12:00:00")
        assert "![v.mp4](../attachments/v.mp4)\n" in out
        assert "![n.mp4](../attachments/n.mp4)\n" in out
        assert "- [song.mp3](../attachments/a.mp3) _(Audio)_\n" in out

    def test_no_attachments_section_when_all_failed(self):
        out = format_record(_message(caption="photo lost"), [], "12:00:00")
        assert "Attachments" not in out
