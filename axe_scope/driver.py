"""Playwright-backed script executor."""

import asyncio
import logging
from typing import Any, List

from playwright.async_api import Page

from .errors import ExecutionTimeoutError

logger = logging.getLogger(__name__)


class PlaywrightExecutor:
    """
    Runs scan functions through ``page.evaluate``.

    The timeout is applied to each call with ``asyncio.wait_for``; nothing on
    the page or its context is reconfigured.
    """

    def __init__(self, page: Page):
        self.page = page

    async def execute(self, script: str, args: List[Any], timeout: float) -> Any:
        try:
            return await asyncio.wait_for(self.page.evaluate(script, args), timeout=timeout)
        except asyncio.TimeoutError:
            raise ExecutionTimeoutError(f"Scan did not complete within {timeout:g} seconds") from None

    async def add_script(self, content: str) -> None:
        await self.page.add_script_tag(content=content)
        logger.debug("Injected %d characters of script into %s", len(content), self.page.url)
