from __future__ import annotations

from typing import Any, List

import pytest


class FakeExecutor:
    """Records evaluate calls and returns a canned response."""

    def __init__(self, response: Any = None) -> None:
        self.response = {"violations": [], "passes": []} if response is None else response
        self.calls: List[tuple] = []
        self.injected: List[str] = []

    async def execute(self, script: str, args: List[Any], timeout: float) -> Any:
        self.calls.append((script, list(args), timeout))
        return self.response

    async def add_script(self, content: str) -> None:
        self.injected.append(content)


class FakeDownloader:
    def __init__(self, content: str = "window.axe = {};") -> None:
        self.content = content
        self.urls: List[str] = []

    async def download(self, url: str) -> str:
        self.urls.append(url)
        return self.content


@pytest.fixture
def make_executor():
    return FakeExecutor


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def downloader() -> FakeDownloader:
    return FakeDownloader()
