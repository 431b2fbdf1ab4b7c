"""Getting the engine script into the page."""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from playwright.async_api import Page

from .errors import InvalidConstructionError, ScriptDownloadError
from .protocols import ContentDownloader, ScriptExecutor

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class PageDownloader:
    """Fetches content with the page's own request context (cookies, proxy)."""

    def __init__(self, page: Page):
        self.page = page

    async def download(self, url: str) -> str:
        response = await self.page.request.get(url)
        if not response.ok:
            raise ScriptDownloadError(url, response.status)
        return await response.text()


class CachedContentDownloader:
    """Wraps a downloader and remembers each URL's content for its lifetime."""

    def __init__(self, downloader: ContentDownloader):
        if downloader is None:
            raise InvalidConstructionError("downloader is required")
        self.downloader = downloader
        self._cache: Dict[str, str] = {}

    async def download(self, url: str) -> str:
        if url in self._cache:
            logger.debug("Engine script cache hit: %s", url)
            return self._cache[url]
        content = await self.downloader.download(url)
        self._cache[url] = content
        return content

    def clear(self) -> None:
        self._cache.clear()


async def inject_engine(
    executor: ScriptExecutor,
    source: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    downloader: Optional[ContentDownloader] = None,
) -> None:
    """
    Put the engine script into the page from exactly one source.

    Args:
        executor: Executor bound to the target page
        source: Script text
        path: Local file holding the script
        url: Remote script location, fetched through ``downloader``
        downloader: Required when ``url`` is used

    Raises:
        InvalidConstructionError: If zero or several sources are given, the
            file does not exist, or a URL is given without a downloader
    """
    given = [name for name, value in (("source", source), ("path", path), ("url", url)) if value]
    if len(given) != 1:
        raise InvalidConstructionError(
            f"Exactly one engine script source is required, got {len(given)}: {', '.join(given) or 'none'}"
        )

    if source:
        content = source
        origin = "inline source"
    elif path:
        script_path = Path(path)
        if not script_path.is_file():
            raise InvalidConstructionError(f"Engine script not found: {script_path}")
        content = read_text(script_path)
        origin = str(script_path)
    else:
        if downloader is None:
            raise InvalidConstructionError("A downloader is required to fetch the engine script")
        content = await downloader.download(url)
        origin = url

    logger.debug("Injecting engine script from %s", origin)
    await executor.add_script(content)
