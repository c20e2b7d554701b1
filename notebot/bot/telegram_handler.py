import logging

from telegram import Update
from telegram.ext import ContextTypes

from notebot.config import ALLOWED_USER_ID
from notebot.core.models import from_telegram
from notebot.core.processor import QueuedMessage

logger = logging.getLogger(__name__)

QUEUE_KEY = "message_queue"


def authorize(sender_id, allowed_id=ALLOWED_USER_ID):
    """Only the single configured account may write notes."""
    if sender_id is None:
        logger.info("[gate] rejected message without sender information")
        return False
    if str(sender_id) != str(allowed_id):
        logger.info("[gate] rejected message from unauthorized user: %s", sender_id)
        return False
    return True


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Gate incoming Telegram messages and queue them for processing."""
    user = update.effective_user
    if not authorize(user.id if user else None, context.bot_data.get("allowed_user_id", ALLOWED_USER_ID)):
        return

    message = update.message
    if message is None:
        logger.info("[gate] no message payload to process")
        return

    queue = context.bot_data[QUEUE_KEY]
    queue.enqueue(QueuedMessage(from_telegram(message), message.reply_text))


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Log errors raised by handlers."""
    update_id = update.update_id if isinstance(update, Update) else None
    logger.error("Bot error for update %s", update_id, exc_info=context.error)
