"""
Fluent builder for running aXe against a Playwright page.

    builder = await AxeBuilder.create(page)
    result = await builder.include("#main").exclude(".ads").analyze()

Configure with include(), exclude() and options before calling analyze().
The builder keeps mutable state and is meant for one task at a time.
"""

from pathlib import Path
from typing import Any, Optional, Union

from playwright.async_api import ElementHandle, Page

from .config import ScanSettings
from .driver import PlaywrightExecutor
from .errors import InvalidConstructionError
from .invoker import OptionsValue, ScanCommand, ScanInvoker
from .protocols import ContentDownloader, ScriptExecutor
from .provision import CachedContentDownloader, PageDownloader, inject_engine
from .results import ScanResult
from .scope import ScopeManager
from .selector_set import SelectorArgs


class AxeBuilder:
    def __init__(
        self,
        page: Optional[Page] = None,
        executor: Optional[ScriptExecutor] = None,
        settings: Optional[ScanSettings] = None,
    ):
        if page is None and executor is None:
            raise InvalidConstructionError("A Playwright page or a script executor is required")

        self.page = page
        self.settings = settings or ScanSettings()
        self.executor = executor or PlaywrightExecutor(page)
        self.scope = ScopeManager()
        self.options: OptionsValue = None
        self.invoker = ScanInvoker(
            self.executor,
            engine_global=self.settings.engine_global,
            timeout=self.settings.script_timeout,
        )

    @classmethod
    async def create(
        cls,
        page: Page,
        script_source: Optional[str] = None,
        script_path: Optional[Union[str, Path]] = None,
        script_url: Optional[str] = None,
        downloader: Optional[ContentDownloader] = None,
        settings: Optional[ScanSettings] = None,
        executor: Optional[ScriptExecutor] = None,
    ) -> "AxeBuilder":
        """
        Build a builder and inject the engine into the page.

        With no script source, path or URL, the engine is downloaded from
        ``settings.script_url``.
        """
        builder = cls(page=page, executor=executor, settings=settings)
        if not (script_source or script_path or script_url):
            script_url = builder.settings.script_url
        if script_url and downloader is None:
            if page is None:
                raise InvalidConstructionError("A downloader is required when no page is given")
            downloader = CachedContentDownloader(PageDownloader(page))
        await inject_engine(
            builder.executor,
            source=script_source,
            path=script_path,
            url=script_url,
            downloader=downloader,
        )
        return builder

    def include(self, *selectors: SelectorArgs) -> "AxeBuilder":
        """Selectors to include in the scan. Any valid CSS selectors."""
        self.scope.include(*selectors)
        return self

    def exclude(self, *selectors: SelectorArgs) -> "AxeBuilder":
        """Selectors to leave out of the scan."""
        self.scope.exclude(*selectors)
        return self

    def with_options(self, options: OptionsValue) -> "AxeBuilder":
        self.options = options
        return self

    def command(self, element: Optional[Union[ElementHandle, Any]] = None) -> ScanCommand:
        if element is not None:
            return self.invoker.build_element_command(element, self.options)
        return self.invoker.build_document_command(self.scope, self.options)

    async def analyze(self, element: Optional[Union[ElementHandle, Any]] = None) -> ScanResult:
        """
        Run aXe and return its findings.

        With an element handle only that element is scanned and configured
        include/exclude selectors are ignored; otherwise the configured scope
        is used, or the whole document when none is set.
        """
        if element is not None:
            return await self.invoker.analyze_element(element, self.options)
        return await self.invoker.analyze_document(self.scope, self.options)
