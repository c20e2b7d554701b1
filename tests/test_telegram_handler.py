"""Tests for the authorization gate and inbound handler."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from telegram import Chat, Message, Update, User

from notebot.bot.telegram_handler import QUEUE_KEY, authorize, handle_message


class RecordingQueue:
    def __init__(self):
        self.items = []

    def enqueue(self, item):
        self.items.append(item)


def _update(user_id, text="hello"):
    user = User(id=user_id, first_name="Sam", is_bot=False)
    message = Message(
        message_id=1,
        date=datetime(2024, 3, 7, 9, 0, tzinfo=timezone.utc),
        chat=Chat(id=user_id, type=Chat.PRIVATE),
        from_user=user,
        text=text,
    )
    return Update(update_id=100, message=message)


def _context(queue):
    return SimpleNamespace(bot_data={QUEUE_KEY: queue, "allowed_user_id": "42"})


class TestAuthorize:
    def test_matching_id(self):
        assert authorize(42, "42") is True
        assert authorize("42", "42") is True

    def test_mismatch(self):
        assert authorize(7, "42") is False

    def test_missing_sender(self):
        assert authorize(None, "42") is False


class TestHandleMessage:
    @pytest.mark.asyncio
    async def test_authorized_message_is_queued(self):
        queue = RecordingQueue()
        await handle_message(_update(42, "note this"), _context(queue))

        assert len(queue.items) == 1
        queued = queue.items[0]
        assert queued.message.text == "note this"
        assert queued.message.sender_id == "42"
        assert queued.reply is not None

    @pytest.mark.asyncio
    async def test_unauthorized_message_is_dropped(self):
        queue = RecordingQueue()
        await handle_message(_update(7), _context(queue))
        assert queue.items == []

    @pytest.mark.asyncio
    async def test_update_without_message_is_dropped(self):
        queue = RecordingQueue()
        update = SimpleNamespace(effective_user=SimpleNamespace(id=42), message=None)
        await handle_message(update, _context(queue))
        assert queue.items == []

    @pytest.mark.asyncio
    async def test_update_without_sender_is_dropped(self):
        queue = RecordingQueue()
        update = SimpleNamespace(effective_user=None, message=object())
        await handle_message(update, _context(queue))
        assert queue.items == []
