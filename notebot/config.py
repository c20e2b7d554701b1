"""Configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()


# Telegram
TELEGRAM_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN") or os.getenv("BOT_TOKEN", "")
ALLOWED_USER_ID = os.getenv("ALLOWED_USER_ID", "").strip()
SEND_CONFIRMATION = os.getenv("SEND_CONFIRMATION", "true").lower() == "true"
CONFIRMATION_TEXT = "✅ Saved to notes!"

# Archive
NOTES_DIR = os.getenv("NOTES_DIR", "./notes")
ATTACHMENTS_DIR = os.getenv("ATTACHMENTS_DIR", "./attachments")

# Downloads
DOWNLOAD_TIMEOUT = float(os.getenv("DOWNLOAD_TIMEOUT", "60"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
