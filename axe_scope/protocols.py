"""Protocol interfaces for the browser-side collaborators."""

from typing import Any, List, Protocol


class ScriptExecutor(Protocol):
    """Interface for running a function inside the page."""

    async def execute(self, script: str, args: List[Any], timeout: float) -> Any:
        """
        Evaluate a JavaScript function with structured arguments.

        Args:
            script: Function source; receives ``args`` as its single parameter
            args: Values passed to the function; element handles allowed
            timeout: Seconds to wait before giving up

        Returns:
            The value the function resolves to

        Raises:
            ExecutionTimeoutError: If ``timeout`` elapses first
        """
        ...

    async def add_script(self, content: str) -> None:
        """Inject script text into the page."""
        ...


class ContentDownloader(Protocol):
    """Interface for fetching the engine script."""

    async def download(self, url: str) -> str:
        """
        Fetch text content from a URL.

        Args:
            url: Absolute URL of the script

        Returns:
            Script source text
        """
        ...
