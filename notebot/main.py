import logging
import sys

from telegram.ext import Application, MessageHandler, filters

from notebot.config import (
    ALLOWED_USER_ID,
    ATTACHMENTS_DIR,
    CONFIRMATION_TEXT,
    DOWNLOAD_TIMEOUT,
    LOG_LEVEL,
    NOTES_DIR,
    SEND_CONFIRMATION,
    TELEGRAM_TOKEN,
)
from notebot.bot.telegram_handler import QUEUE_KEY, handle_error, handle_message
from notebot.core.dispatch import MessageQueue
from notebot.core.processor import MessageProcessor
from notebot.integrations.attachments import AttachmentFetcher, TelegramTransport
from notebot.memory.archive import NoteArchive

logger = logging.getLogger("notebot")


def setup_logging():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        stream=sys.stdout,
    )
    # httpx logs request URLs, which carry the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def _post_init(app: Application):
    archive = app.bot_data["archive"]
    fetcher = AttachmentFetcher(TelegramTransport(app.bot), archive.attachments_dir, timeout=DOWNLOAD_TIMEOUT)
    processor = MessageProcessor(fetcher, archive, CONFIRMATION_TEXT if SEND_CONFIRMATION else None)
    app.bot_data["fetcher"] = fetcher
    app.bot_data[QUEUE_KEY] = MessageQueue(processor)


async def _post_stop(app: Application):
    """Finish queued messages while the bot can still resolve files and reply."""
    queue = app.bot_data.get(QUEUE_KEY)
    if queue is None:
        return
    if queue.pending:
        logger.info("Finishing %d queued message(s)...", queue.pending)
    await queue.wait_idle()


async def _post_shutdown(app: Application):
    fetcher = app.bot_data.get("fetcher")
    if fetcher is not None:
        await fetcher.close()


def build_application(archive, token=TELEGRAM_TOKEN):
    app = (
        Application.builder()
        .token(token)
        .concurrent_updates(True)
        .post_init(_post_init)
        .post_stop(_post_stop)
        .post_shutdown(_post_shutdown)
        .build()
    )
    app.bot_data["archive"] = archive
    app.bot_data["allowed_user_id"] = ALLOWED_USER_ID
    app.add_handler(MessageHandler(filters.UpdateType.MESSAGE, handle_message))
    app.add_error_handler(handle_error)
    return app


def main():
    setup_logging()
    if not TELEGRAM_TOKEN or not ALLOWED_USER_ID:
        logger.error("TELEGRAM_BOT_TOKEN and ALLOWED_USER_ID must be set in .env")
        sys.exit(1)

    archive = NoteArchive(NOTES_DIR, ATTACHMENTS_DIR)
    archive.ensure_dirs()

    app = build_application(archive)

    logger.info("Telegram Note Bot is running!")
    logger.info("Notes will be saved to: %s/", archive.notes_dir)
    logger.info("Attachments will be saved to: %s/", archive.attachments_dir)
    logger.info("Only accepting messages from user ID: %s", ALLOWED_USER_ID)
    # run_polling stops cleanly on SIGINT/SIGTERM
    app.run_polling()


if __name__ == "__main__":
    main()
