"""Download message attachments from Telegram into the attachments directory."""

import asyncio
import logging
from pathlib import Path

import httpx
from telegram import Bot

from notebot.core.models import AttachmentResult
from notebot.core.naming import generate_filename, split_declared_name

logger = logging.getLogger(__name__)


class TelegramTransport:
    """Resolves Telegram file ids to their time-limited download URLs."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def resolve_download_address(self, file_id: str) -> str:
        tg_file = await self.bot.get_file(file_id)
        if not tg_file.file_path:
            raise ValueError(f"no download path for file {file_id}")
        return tg_file.file_path


class AttachmentFetcher:
    """Fetches one media item at a time; a failed fetch yields None, never an exception."""

    def __init__(self, transport, attachments_dir, timeout=60.0, client: httpx.AsyncClient | None = None):
        self.transport = transport
        self.attachments_dir = Path(attachments_dir)
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, item) -> AttachmentResult | None:
        base, ext = split_declared_name(item.file_name, item.kind.default_base, item.kind.default_ext)
        file_name = generate_filename(base, ext)
        file_path = self.attachments_dir / file_name

        try:
            url = await self.transport.resolve_download_address(item.file_id)
            await self._download(url, file_path)
        except Exception as e:
            file_path.unlink(missing_ok=True)
            logger.warning("[fetch] failed to download %s: %s", file_name, e)
            return None
        except BaseException:
            # Cancelled mid-transfer: drop the partial file, let cancellation through.
            file_path.unlink(missing_ok=True)
            raise

        logger.info("[fetch] saved %s", file_name)
        return AttachmentResult(file_name, item.kind, item.file_name)

    async def _download(self, url: str, file_path: Path) -> None:
        client = self._get_client()
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            with open(file_path, "wb") as fh:
                async for chunk in response.aiter_bytes():
                    await asyncio.to_thread(fh.write, chunk)

    async def fetch_all(self, message) -> list[AttachmentResult]:
        """Fetch every media item in declaration order, one after another."""
        results = []
        for item in message.media:
            result = await self.fetch(item)
            if result is not None:
                results.append(result)
        return results
