"""Normalized message payloads passed through the capture pipeline."""

import time
from dataclasses import dataclass, field
from enum import Enum

from telegram import (
    Message,
    MessageOriginChannel,
    MessageOriginChat,
    MessageOriginHiddenUser,
    MessageOriginUser,
)


class MediaKind(Enum):
    """Media kinds a message can carry, in declaration order.

    Value tuple: (label, default base name, default extension, inline embed).
    """

    PHOTO = ("Photo", "photo", ".jpg", True)
    DOCUMENT = ("Document", "document", ".bin", False)
    VIDEO = ("Video", "video", ".mp4", True)
    AUDIO = ("Audio", "audio", ".mp3", False)
    VOICE = ("Voice", "voice", ".ogg", False)
    VIDEO_NOTE = ("Video Note", "video_note", ".mp4", True)

    def __init__(self, label, default_base, default_ext, inline):
        self.label = label
        self.default_base = default_base
        self.default_ext = default_ext
        self.inline = inline


@dataclass(frozen=True)
class MediaItem:
    kind: MediaKind
    file_id: str
    file_name: str | None = None


@dataclass(frozen=True)
class Provenance:
    """Where a forwarded message originally came from."""

    USER = "user"
    CHAT = "chat"
    NAME = "name"

    kind: str
    name: str


@dataclass(frozen=True)
class AttachmentResult:
    stored_name: str
    kind: MediaKind
    original_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.original_name or self.stored_name


@dataclass(frozen=True)
class IncomingMessage:
    sender_id: str | None
    chat_id: int | None = None
    text: str | None = None
    caption: str | None = None
    provenance: Provenance | None = None
    media: tuple[MediaItem, ...] = field(default_factory=tuple)
    date: float | None = None

    @property
    def body(self) -> str:
        return self.text or self.caption or ""

    def arrival_time(self) -> float:
        return self.date if self.date is not None else time.time()


def resolve_provenance(user=None, chat_title=None, sender_name=None):
    """Pick the forward annotation: named user > named chat > free-text name."""
    if user is not None:
        name = f"@{user.username}" if user.username else user.first_name
        return Provenance(Provenance.USER, name)
    if chat_title:
        return Provenance(Provenance.CHAT, chat_title)
    if sender_name:
        return Provenance(Provenance.NAME, sender_name)
    return None


def _provenance_from_origin(origin):
    if origin is None:
        return None
    if isinstance(origin, MessageOriginUser):
        return resolve_provenance(user=origin.sender_user)
    if isinstance(origin, MessageOriginChat):
        return resolve_provenance(chat_title=origin.sender_chat.title)
    if isinstance(origin, MessageOriginChannel):
        return resolve_provenance(chat_title=origin.chat.title)
    if isinstance(origin, MessageOriginHiddenUser):
        return resolve_provenance(sender_name=origin.sender_user_name)
    return None


def _media_from_message(message: Message) -> tuple[MediaItem, ...]:
    media = []
    if message.photo:
        # Sizes are ordered smallest to largest; keep the highest resolution.
        media.append(MediaItem(MediaKind.PHOTO, message.photo[-1].file_id))
    if message.document:
        media.append(MediaItem(MediaKind.DOCUMENT, message.document.file_id,
                               message.document.file_name))
    if message.video:
        media.append(MediaItem(MediaKind.VIDEO, message.video.file_id))
    if message.audio:
        media.append(MediaItem(MediaKind.AUDIO, message.audio.file_id,
                               message.audio.file_name))
    if message.voice:
        media.append(MediaItem(MediaKind.VOICE, message.voice.file_id))
    if message.video_note:
        media.append(MediaItem(MediaKind.VIDEO_NOTE, message.video_note.file_id))
    return tuple(media)


def from_telegram(message: Message) -> IncomingMessage:
    """Normalize a python-telegram-bot Message into an IncomingMessage."""
    sender = message.from_user
    return IncomingMessage(
        sender_id=str(sender.id) if sender else None,
        chat_id=message.chat_id,
        text=message.text,
        caption=message.caption,
        provenance=_provenance_from_origin(message.forward_origin),
        media=_media_from_message(message),
        date=message.date.timestamp() if message.date else None,
    )
