"""Append-only, day-partitioned markdown note archive."""

import logging
from pathlib import Path

from notebot.core.naming import day_key

logger = logging.getLogger(__name__)


class NoteArchive:
    """Writes note fragments into notes/{D}-{mon}.md.

    The day-file is chosen from the local date at write time, not from the
    message's own timestamp. Nothing here ever rewrites or removes a note.
    """

    def __init__(self, notes_dir, attachments_dir):
        self.notes_dir = Path(notes_dir)
        self.attachments_dir = Path(attachments_dir)

    def ensure_dirs(self):
        """Create the notes and attachments directories. Called once at startup."""
        for directory in (self.notes_dir, self.attachments_dir):
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                logger.info("[archive] created %s", directory)

    def day_file(self, now=None) -> Path:
        return self.notes_dir / f"{day_key(now)}.md"

    def append(self, fragment: str, now=None) -> bool:
        """Append a fragment plus trailing newline. Returns False if the write failed."""
        path = self.day_file(now)
        try:
            with open(path, "a", encoding="utf-8") as fh:
                fh.write(f"{fragment}\n")
        except OSError as e:
            logger.error("[archive] error writing to %s: %s", path.name, e)
            return False
        logger.info("[archive] saved to %s", path.name)
        return True
