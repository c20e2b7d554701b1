"""Timestamps, day keys and collision-free attachment filenames."""

import os
import re
import secrets
import string
import time
from datetime import datetime

MONTH_NAMES = ["jan", "feb", "mar", "apr", "may", "jun",
               "jul", "aug", "sep", "oct", "nov", "dec"]

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits
_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def format_time(ts=None):
    """HH:MM:SS in local time for an epoch timestamp (now when None)."""
    dt = datetime.fromtimestamp(ts) if ts is not None else datetime.now()
    return dt.strftime("%H:%M:%S")


def day_key(now=None):
    """Day-file key like '7-mar' for the given (or current) local date."""
    now = now or datetime.now()
    return f"{now.day}-{MONTH_NAMES[now.month - 1]}"


def sanitize(name):
    if not name:
        return "file"
    return _UNSAFE.sub("_", name)


def random_token(length=6):
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


def generate_filename(base_name, extension, now_ms=None):
    """Build '{ms}_{token}_{base}{ext}' for a new attachment."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{now_ms}_{random_token()}_{sanitize(base_name)}{extension}"


def split_declared_name(file_name, default_base, default_ext):
    """Split a sender-declared filename into (base, extension).

    Falls back to the media kind's defaults for whichever part is missing,
    so 'plan v2.docx' gives ('plan v2', '.docx') and a nameless document
    gives ('document', '.bin').
    """
    if not file_name:
        return default_base, default_ext
    base, ext = os.path.splitext(file_name)
    return base or default_base, ext or default_ext
