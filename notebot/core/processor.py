"""Turn one queued message into a note entry: fetch, format, persist, acknowledge."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from telegram.error import TelegramError

from notebot.core.formatter import format_record
from notebot.core.models import IncomingMessage
from notebot.core.naming import format_time

logger = logging.getLogger(__name__)


@dataclass
class QueuedMessage:
    message: IncomingMessage
    reply: Callable[[str], Awaitable] | None = None


class MessageProcessor:
    def __init__(self, fetcher, archive, confirmation_text=None):
        self.fetcher = fetcher
        self.archive = archive
        self.confirmation_text = confirmation_text

    async def __call__(self, queued: QueuedMessage) -> None:
        await self.process(queued)

    async def process(self, queued: QueuedMessage) -> None:
        message = queued.message
        body = message.body
        logger.info("[process] %s%s", body[:50], "..." if len(body) > 50 else "")

        attachments = await self.fetcher.fetch_all(message)
        timestamp = format_time(message.arrival_time())
        fragment = format_record(message, attachments, timestamp)

        # The reply goes out even if the write failed; the archive logs the error.
        self.archive.append(fragment)

        if self.confirmation_text and queued.reply is not None:
            try:
                await queued.reply(self.confirmation_text)
            except TelegramError as e:
                logger.warning("[process] confirmation not sent: %s", e)
